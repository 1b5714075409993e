"""Version models, manifest access and next-version resolution."""

from .models import AheadPolicy, FileVersionRecord, ReleaseKind, ReleaseOutcome
from .resolver import ResolutionError, resolve

__all__ = [
    "AheadPolicy",
    "FileVersionRecord",
    "ReleaseKind",
    "ReleaseOutcome",
    "ResolutionError",
    "resolve",
]
