"""Next-version resolution across manifest files and tag history.

Everything here is a pure function over fully materialized inputs: the
declared file versions, the current tag, the full tag list and the requested
release kind. Resolution runs in two phases:

* Phase A (:func:`next_from_declared`) reconciles the declared versions with
  a baseline: keep the baseline when every file matches it, adopt a file
  version already ahead of it (patch requests only, unless the ahead policy
  says otherwise), or bump the baseline.
* Phase B (:func:`next_avoiding_tags`) seeds Phase A from the highest
  existing tag in scope and keeps bumping until the candidate is strictly
  above every tag that could collide with it.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from semantic_version import Version

from .models import AheadPolicy, FileVersionRecord, ReleaseKind
from .parser import parse_tags

logger = logging.getLogger(__name__)


class ResolutionError(RuntimeError):
    """Raised when tag collision avoidance fails to converge."""


def max_version(records: Sequence[FileVersionRecord]) -> Optional[Version]:
    return max((r.version for r in records), default=None)


def min_version(records: Sequence[FileVersionRecord]) -> Optional[Version]:
    return min((r.version for r in records), default=None)


def versions_agree(current: Version, records: Sequence[FileVersionRecord]) -> bool:
    """Return True when there is at least one record and all equal ``current``."""
    return bool(records) and all(r.version == current for r in records)


def bump(version: Version, kind: ReleaseKind) -> Version:
    """Increment ``version``; pre-release and build metadata are dropped."""
    if kind is ReleaseKind.MAJOR:
        return version.next_major()
    if kind is ReleaseKind.MINOR:
        return version.next_minor()
    return version.next_patch()


def next_from_declared(
    baseline: Version,
    records: Sequence[FileVersionRecord],
    kind: ReleaseKind,
    policy: AheadPolicy = AheadPolicy.PATCH_ONLY,
) -> Version:
    """Phase A: reconcile the declared versions against ``baseline``."""
    highest = max_version(records)
    lowest = min_version(records)
    if highest is not None and baseline == highest == lowest:
        return baseline
    if highest is not None and highest > baseline:
        if kind is ReleaseKind.PATCH or policy is AheadPolicy.ANY:
            return highest
    return bump(baseline, kind)


def tag_ceiling(scope: Version, tags: Iterable[Version], kind: ReleaseKind) -> Optional[Version]:
    """Highest tag sharing ``scope``'s major.minor; the highest tag overall for major bumps."""
    if kind is ReleaseKind.MAJOR:
        candidates = list(tags)
    else:
        candidates = [t for t in tags if (t.major, t.minor) == (scope.major, scope.minor)]
    return max(candidates, default=None)


def next_avoiding_tags(
    baseline: Version,
    records: Sequence[FileVersionRecord],
    tags: Iterable[str],
    kind: ReleaseKind,
    policy: AheadPolicy = AheadPolicy.PATCH_ONLY,
) -> Version:
    """Phase B: resolve a version that is not already a tag.

    Args:
        baseline: Version of the current tag (0.0.0 when untagged).
        records: Declared file versions.
        tags: All tag names of the repository; non-semver names are ignored.
        kind: Requested release kind.
        policy: Ahead-of-baseline adoption policy for Phase A.

    Raises:
        ResolutionError: If the bounded search does not converge.
    """
    parsed: List[Version] = parse_tags(tags)
    highest = max_version(records)
    scope = highest if highest is not None else baseline

    ceiling = tag_ceiling(scope, parsed, kind)
    if ceiling is None:
        if highest is not None and highest >= baseline and highest not in parsed:
            return highest
        seed = baseline
    else:
        seed = max(ceiling, baseline)

    candidate = next_from_declared(seed, records, kind, policy)
    if highest is not None and candidate < highest:
        # a file is staged beyond what the bump reaches
        candidate = highest
    return _above_tags(candidate, parsed, kind)


def _above_tags(candidate: Version, parsed: Sequence[Version], kind: ReleaseKind) -> Version:
    """Bump ``candidate`` past its tag ceiling until nothing collides.

    Each pass steps over a distinct tag, so more passes than distinct tags
    means the search is broken.
    """
    limit = len(set(parsed)) + 1
    for _ in range(limit):
        ceiling = tag_ceiling(candidate, parsed, kind)
        if ceiling is None or candidate > ceiling:
            return candidate
        logger.debug("Version %s collides with tag %s, bumping %s", candidate, ceiling, kind.value)
        candidate = bump(ceiling, kind)
    raise ResolutionError(
        f"Could not find a free {kind.value} version above {candidate} within {limit} steps"
    )


def resolve(
    records: Sequence[FileVersionRecord],
    current: Version,
    tags: Iterable[str],
    kind: ReleaseKind,
    policy: AheadPolicy = AheadPolicy.PATCH_ONLY,
) -> Version:
    """Compute the next release version.

    Returns ``current`` unchanged when every declared version already equals
    it; otherwise a version that is at least every declared version and the
    current tag, and that no existing tag uses.
    """
    if versions_agree(current, records):
        return current
    return next_avoiding_tags(current, records, tags, kind, policy)
