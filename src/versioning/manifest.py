"""Read and write the ``version`` field of JSON manifest files.

Reading never raises: a missing, empty, malformed or version-less file is
reported as absent (None) so one bad manifest does not abort the run.
Writing re-reads the file, changes only ``version`` and keeps the original
indentation, key order and trailing newline.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Optional

import semantic_version

from .models import FileVersionRecord
from .parser import parse_version

logger = logging.getLogger(__name__)

VERSION_KEY = "version"


class ManifestError(ValueError):
    """Raised when a manifest can no longer be rewritten as a JSON object."""


def detect_indent(content: str) -> str:
    """Return the most common indentation step used in ``content``.

    Tabs and spaces are counted separately; an unindented document yields "".
    """
    steps: Counter = Counter()
    prev_char, prev_width = "", 0
    for line in content.splitlines():
        stripped = line.lstrip(" \t")
        if not stripped:
            continue
        lead = line[: len(line) - len(stripped)]
        char = lead[0] if lead else ""
        width = len(lead)
        if char and (char != prev_char or width != prev_width):
            base = prev_width if char == prev_char else 0
            diff = abs(width - base)
            if diff:
                steps[(char, diff)] += 1
        prev_char, prev_width = (char, width) if char else ("", 0)
    if not steps:
        return ""
    (char, size), _ = steps.most_common(1)[0]
    return char * size


def read_version_record(path: str) -> Optional[FileVersionRecord]:
    """Read the declared version of one manifest.

    Args:
        path: Manifest file path.

    Returns:
        FileVersionRecord, or None when the file has no usable version.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return None
    if not content.strip():
        logger.warning("File %s is empty", path)
        return None
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("File %s is not valid JSON: %s", path, exc)
        return None
    if not isinstance(data, dict) or not data.get(VERSION_KEY):
        logger.warning("File %s does not contain a %s key", path, VERSION_KEY)
        return None
    version = parse_version(data[VERSION_KEY])
    if version is None:
        logger.warning("Invalid semantic version in file %s: %s", path, data[VERSION_KEY])
        return None
    return FileVersionRecord(path=str(path), version=version, indent=detect_indent(content))


def read_version_records(paths: Iterable[str]) -> List[FileVersionRecord]:
    """Read every manifest and keep only those declaring a valid version."""
    records = []
    for path in paths:
        record = read_version_record(path)
        if record is not None:
            records.append(record)
    return records


def apply_version(target: semantic_version.Version, record: FileVersionRecord) -> bool:
    """Write ``target`` into the manifest described by ``record``.

    The file is re-read so fields changed since the record was captured are
    preserved. Nothing is written when its version already equals ``target``.

    Returns:
        True when the file was rewritten.

    Raises:
        OSError: If the file cannot be read or written.
        ManifestError: If the file is no longer UTF-8 JSON holding an object.
    """
    path = Path(record.path)
    try:
        content = path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Cannot update {record.path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Cannot update {record.path}: expected a JSON object")
    if parse_version(data.get(VERSION_KEY)) == target:
        logger.debug("%s already at version %s", record.path, target)
        return False

    data[VERSION_KEY] = str(target)
    if record.indent:
        rendered = json.dumps(data, indent=record.indent, ensure_ascii=False)
    else:
        rendered = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    if content.endswith("\n"):
        rendered += "\n"
    path.write_text(rendered, encoding="utf-8")
    logger.info("Updated %s to version %s", record.path, target)
    return True
