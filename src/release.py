"""Release pipeline: resolve, write manifests, commit, tag and push.

All blocking work (tag listing, file I/O, git) happens here, strictly before
or after the pure resolver call. Failures propagate to the caller; nothing
already applied is rolled back, and a rerun skips work that is already done.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from semantic_version import Version

from cli_config import ReleaseConfig
from constants import Constants, TagSelection, TagSources
from common.logging_utils import extra_context, is_debug_enabled
from repository.git import GitClient
from repository.github import GitHubClient, split_repository
from versioning.manifest import apply_version, read_version_records
from versioning.models import ReleaseOutcome
from versioning.parser import format_tag, parse_version, render_template, uses_v_prefix
from versioning.resolver import resolve, versions_agree

logger = logging.getLogger(__name__)

ZERO = Version(Constants.ZERO_VERSION)


def list_tags(config: ReleaseConfig, git: GitClient, github: Optional[GitHubClient] = None) -> List[str]:
    """Return every tag name, most recent first, from the configured source."""
    if config.tag_source is TagSources.API:
        owner, repo = split_repository(config.repository)
        client = github or GitHubClient(token=config.token)
        return client.get_tags(owner, repo)
    return git.list_tags()


def resolve_branch(config: ReleaseConfig, git: GitClient, github: Optional[GitHubClient] = None) -> str:
    """Branch to push: the repository default branch, or the local one without API access."""
    if config.tag_source is TagSources.API:
        owner, repo = split_repository(config.repository)
        client = github or GitHubClient(token=config.token)
        return client.get_default_branch(owner, repo)
    return git.current_branch()


def select_current_tag(tags: List[str], selection: TagSelection) -> Tuple[str, Version]:
    """Pick the current tag and its version.

    Returns:
        (tag name, version); ("", 0.0.0) when there are no tags. A latest tag
        that is not a semantic version maps to 0.0.0 but keeps its name so
        the prefix convention can still be detected.
    """
    if not tags:
        return "", ZERO
    if selection is TagSelection.HIGHEST:
        parsed = [(v, t) for t, v in ((t, parse_version(t)) for t in tags) if v is not None]
        if parsed:
            version, tag = max(parsed, key=lambda pair: pair[0])
            return tag, version
        return tags[0], ZERO
    return tags[0], parse_version(tags[0]) or ZERO


def write_output(name: str, value: str, path: Optional[str]) -> None:
    """Append ``name=value`` to the GitHub Actions output file when configured."""
    if not path:
        return
    with open(path, "a", encoding="utf-8") as fh:
        fh.write(f"{name}={value}\n")


def run_release(
    config: ReleaseConfig,
    git: Optional[GitClient] = None,
    github: Optional[GitHubClient] = None,
) -> ReleaseOutcome:
    """Run one release.

    Args:
        config: Options for this run.
        git: Git porcelain for the working tree (defaults to the current directory).
        github: API client used when tags come from GitHub.

    Returns:
        ReleaseOutcome describing the tag that now names the release.
    """
    git = git or GitClient()

    tags = list_tags(config, git, github)
    current_name, current = select_current_tag(tags, config.tag_selection)
    logger.info("Current tag: %s (%d tags)", current_name or "<none>", len(tags))

    records = read_version_records(config.files)
    for record in records:
        logger.info("%s declares version %s", record.path, record.version)

    if versions_agree(current, records):
        logger.info("All versions are equal. No update needed.")
        tag_name = current_name or str(current)
        write_output(Constants.OUTPUT_TAG_NAME, tag_name, config.output_path)
        return ReleaseOutcome(tag_name=tag_name, version=str(current), updated=False, dry_run=config.dry_run)

    new_version = resolve(records, current, tags, config.release_kind, config.ahead_policy)
    new_tag = format_tag(new_version, uses_v_prefix(current_name))
    if is_debug_enabled(logger):
        logger.debug(
            "Resolved next version",
            extra=extra_context(
                event="decision",
                component="release",
                action="resolve",
                outcome=str(new_version),
                release_kind=config.release_kind.value,
                declared=len(records),
            )
        )

    if config.dry_run:
        logger.info("Dry run: would create tag %s", new_tag)
        return ReleaseOutcome(tag_name=new_tag, version=str(new_version), updated=True, dry_run=True)

    branch = resolve_branch(config, git, github)
    written = [record.path for record in records if apply_version(new_version, record)]

    git.configure_identity(config.git_user_name, config.git_user_email)

    committed = False
    if git.has_changes():
        git.add([record.path for record in records])
        git.commit(render_template(config.commit_message, str(new_version), new_tag))
        committed = True
    else:
        logger.info("Working tree clean, skipping commit")

    tag_message = render_template(config.tag_message, str(new_version), new_tag) if config.tag_message else None
    git.tag(new_tag, tag_message)
    git.push(new_tag, force=True)
    git.push(branch)

    write_output(Constants.OUTPUT_TAG_NAME, new_tag, config.output_path)
    logger.info("Created new annotated tag: %s", new_tag)
    return ReleaseOutcome(
        tag_name=new_tag,
        version=str(new_version),
        updated=True,
        committed=committed,
        files_written=written,
        branch=branch,
    )
