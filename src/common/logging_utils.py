"""Centralized logging helpers.

Configures the root logger once for the CLI and provides small helpers for
structured DEBUG traces: an ``extra`` builder, a debug-level guard, a
duration timer and URL/token redaction so secrets never reach the logs.
"""
from __future__ import annotations

import logging
import os
import re
import time
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_KEYS = ("token", "access_token", "private_token", "password", "secret", "key")
_TOKEN_PATTERN = re.compile(r"(gh[pousr]_[A-Za-z0-9]{16,}|github_pat_[A-Za-z0-9_]{16,})")
REDACTED = "[REDACTED]"


def configure_logging(level: Optional[str] = None, logfile: Optional[str] = None, quiet: bool = False) -> None:
    """Configure the root logger for CLI use.

    The level comes from ``level`` or the TAGSYNC_LOG_LEVEL environment
    variable and defaults to INFO. Calling it again replaces the handlers.

    Args:
        level: Level name (DEBUG, INFO, ...).
        logfile: Optional path; when set, records are also written there.
        quiet: Suppress console output.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = []
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))
    if not quiet:
        handlers.append(logging.StreamHandler())
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level_value,
        format=Constants.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped so formatters only see populated fields.
    """
    return {key: value for key, value in fields.items() if value is not None}


def redact(text: Optional[str]) -> str:
    """Mask GitHub-style tokens inside free text."""
    if not text:
        return ""
    return _TOKEN_PATTERN.sub(REDACTED, str(text))


def safe_url(url: str) -> str:
    """Return ``url`` with credentials and sensitive query values masked."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return redact(url)
    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{REDACTED}@{netloc.split('@', 1)[1]}"
    query = parts.query
    if query:
        pairs = [
            (k, REDACTED if k.lower() in _SENSITIVE_KEYS else v)
            for k, v in parse_qsl(query, keep_blank_values=True)
        ]
        query = urlencode(pairs, safe="[]")
    return redact(urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment)))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds; still running timers report time so far."""
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)
