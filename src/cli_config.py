"""Release configuration assembled once at the CLI boundary.

Values are merged with the precedence CLI > environment > config file >
defaults into an immutable ReleaseConfig that is passed down explicitly; no
module reads the environment for these options afterwards.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from constants import Constants, TagSelection, TagSources
from repository.github import split_repository
from versioning.models import AheadPolicy, ReleaseKind

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when an option value is missing or invalid."""


@dataclass(frozen=True)
class ReleaseConfig:
    """Options for one release run."""

    release_kind: ReleaseKind
    files: Tuple[str, ...]
    commit_message: str
    tag_message: str
    ahead_policy: AheadPolicy
    tag_source: TagSources
    tag_selection: TagSelection
    repository: Optional[str]
    token: Optional[str]
    git_user_name: str
    git_user_email: str
    dry_run: bool = False
    output_path: Optional[str] = None


# option name -> (args attribute, environment variable, default)
_OPTIONS: Dict[str, Tuple[str, Optional[str], Any]] = {
    "release_type": ("RELEASE_TYPE", Constants.ENV_RELEASE_TYPE, Constants.DEFAULT_RELEASE_TYPE),
    "files": ("JSON_FILES", Constants.ENV_JSON_FILES, Constants.DEFAULT_JSON_FILES),
    "commit_message": ("COMMIT_MESSAGE", Constants.ENV_COMMIT_MESSAGE, Constants.DEFAULT_COMMIT_MESSAGE),
    "tag_message": ("TAG_MESSAGE", Constants.ENV_TAG_MESSAGE, Constants.DEFAULT_TAG_MESSAGE),
    "ahead_policy": ("AHEAD_POLICY", Constants.ENV_AHEAD_POLICY, AheadPolicy.PATCH_ONLY.value),
    "tag_source": ("TAG_SOURCE", Constants.ENV_TAG_SOURCE, TagSources.AUTO.value),
    "tag_selection": ("TAG_SELECTION", Constants.ENV_TAG_SELECTION, TagSelection.LATEST.value),
    "repository": ("REPOSITORY", Constants.ENV_GITHUB_REPOSITORY, None),
    "git_user_name": ("GIT_USER_NAME", Constants.ENV_GIT_USER_NAME, Constants.DEFAULT_GIT_USER_NAME),
    "git_user_email": ("GIT_USER_EMAIL", Constants.ENV_GIT_USER_EMAIL, Constants.DEFAULT_GIT_USER_EMAIL),
}


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load options from a YAML (or JSON) file.

    A top-level ``tagsync`` section is used when present.

    Raises:
        ConfigError: If the file is missing, unreadable as UTF-8 YAML or not a mapping.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Config file {config_path} is not valid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    section = data.get("tagsync", data)
    return section if isinstance(section, dict) else {}


def _pick(name: str, args: Any, environ: Mapping[str, str], file_cfg: Mapping[str, Any]) -> Any:
    attr, env_name, default = _OPTIONS[name]
    cli_value = getattr(args, attr, None)
    if cli_value not in (None, []):
        return cli_value
    if env_name and environ.get(env_name):
        return environ[env_name]
    if file_cfg.get(name) is not None:
        return file_cfg[name]
    return default


def _split_files(value: Any) -> Tuple[str, ...]:
    """Normalize a space separated string or a list of them into paths."""
    items = value if isinstance(value, (list, tuple)) else [value]
    files = []
    for item in items:
        files.extend(str(item).split())
    return tuple(files)


def _enum(enum_cls, value: Any, option: str):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid {option} '{value}'. Expected one of: {allowed}") from exc


def build_config(args: Any, environ: Optional[Mapping[str, str]] = None) -> ReleaseConfig:
    """Build the ReleaseConfig for this run.

    Args:
        args: Parsed argparse namespace.
        environ: Environment mapping (defaults to os.environ).

    Raises:
        ConfigError: On invalid or missing values.
    """
    environ = os.environ if environ is None else environ
    file_cfg = load_config_file(getattr(args, "CONFIG", None))

    def pick(name: str) -> Any:
        return _pick(name, args, environ, file_cfg)

    files = _split_files(pick("files"))
    if not files:
        raise ConfigError("No JSON files configured")

    repository = pick("repository") or None
    if repository:
        try:
            split_repository(repository)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    token = environ.get(Constants.ENV_GITHUB_TOKEN) or None
    tag_source = _enum(TagSources, pick("tag_source"), "tag source")
    if tag_source is TagSources.AUTO:
        tag_source = TagSources.API if repository and token else TagSources.GIT
    if tag_source is TagSources.API and not repository:
        raise ConfigError("The GitHub tag source requires a repository (owner/repo)")
    logger.debug("Tag source resolved to %s", tag_source.value)

    return ReleaseConfig(
        release_kind=_enum(ReleaseKind, pick("release_type"), "release type"),
        files=files,
        commit_message=str(pick("commit_message")),
        tag_message=str(pick("tag_message") or ""),
        ahead_policy=_enum(AheadPolicy, pick("ahead_policy"), "ahead policy"),
        tag_source=tag_source,
        tag_selection=_enum(TagSelection, pick("tag_selection"), "tag selection"),
        repository=repository,
        token=token,
        git_user_name=str(pick("git_user_name")),
        git_user_email=str(pick("git_user_email")),
        dry_run=bool(getattr(args, "DRY_RUN", False)),
        output_path=environ.get(Constants.ENV_GITHUB_OUTPUT) or None,
    )
