"""Data models for version synchronization and release runs."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from semantic_version import Version


class ReleaseKind(Enum):
    """Requested severity of the version increment."""
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


class AheadPolicy(Enum):
    """When a declared version ahead of the baseline is adopted as-is."""
    PATCH_ONLY = "patch-only"
    ANY = "any"


@dataclass(frozen=True)
class FileVersionRecord:
    """Version declared by one tracked manifest file."""
    path: str
    version: Version
    indent: str  # formatting hint, threaded back into writes unchanged


@dataclass
class ReleaseOutcome:
    """Result of a release run, surfaced as the step output."""
    tag_name: str
    version: str
    updated: bool
    dry_run: bool = False
    committed: bool = False
    files_written: List[str] = field(default_factory=list)
    branch: Optional[str] = None
