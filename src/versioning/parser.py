"""Version and tag string parsing utilities."""

from typing import Iterable, List, Optional

import semantic_version

from constants import Constants


def clean_version(raw: Optional[str]) -> Optional[str]:
    """Strip whitespace and a single leading ``v`` or ``=`` from a version string.

    Returns None for non-string or empty input.
    """
    if not isinstance(raw, str):
        return None
    s = raw.strip()
    if s[:1] in ('v', '='):
        s = s[1:].strip()
    return s or None


def parse_version(raw: Optional[str]) -> Optional[semantic_version.Version]:
    """Parse a strict semantic version, tolerating a leading ``v``/``=``.

    Returns None when the string is not a valid semantic version.
    """
    cleaned = clean_version(raw)
    if cleaned is None:
        return None
    try:
        return semantic_version.Version(cleaned)
    except ValueError:
        return None


def parse_tags(tags: Iterable[str]) -> List[semantic_version.Version]:
    """Parse tag names into versions, skipping anything that is not semver."""
    parsed = []
    for tag in tags:
        version = parse_version(tag)
        if version is not None:
            parsed.append(version)
    return parsed


def uses_v_prefix(tag: Optional[str]) -> bool:
    """Return True when the repository's tag convention is ``v``-prefixed."""
    return bool(tag) and tag.startswith(Constants.TAG_PREFIX)


def format_tag(version: semantic_version.Version, prefixed: bool) -> str:
    """Render a version as a tag name under the detected prefix convention."""
    return f"{Constants.TAG_PREFIX}{version}" if prefixed else str(version)


def render_template(template: str, version: str, tag: str) -> str:
    """Substitute every ``{version}`` and ``{tag}`` placeholder.

    Other braces are left untouched, so templates are not ``str.format`` strings.
    """
    return (template or "").replace("{version}", version).replace("{tag}", tag)
