"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    CONFIG_ERROR = 3
    GIT_ERROR = 4
    RESOLUTION_ERROR = 5


class TagSources(Enum):
    """Where the tag history is read from.

    Args:
        Enum (string): Tag source names accepted on the command line.
    """

    AUTO = "auto"
    API = "api"
    GIT = "git"


class TagSelection(Enum):
    """How the current tag is picked from the listed tags.

    Args:
        Enum (string): Selection strategy names accepted on the command line.
    """

    LATEST = "latest"
    HIGHEST = "highest"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    ZERO_VERSION = "0.0.0"
    TAG_PREFIX = "v"
    DEFAULT_RELEASE_TYPE = "patch"
    DEFAULT_JSON_FILES = "package.json"
    DEFAULT_COMMIT_MESSAGE = "Update version to {version}"
    DEFAULT_TAG_MESSAGE = ""
    DEFAULT_GIT_USER_NAME = "github-actions"
    DEFAULT_GIT_USER_EMAIL = "github-actions@github.com"
    DEFAULT_REMOTE = "origin"
    OUTPUT_TAG_NAME = "tag-name"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    GIT_TIMEOUT = 120  # Timeout in seconds for a single git invocation

    # Environment variables (GitHub Actions inputs and runtime)
    ENV_RELEASE_TYPE = "RELEASE_TYPE"
    ENV_JSON_FILES = "JSON_FILES"
    ENV_COMMIT_MESSAGE = "COMMIT_MESSAGE"
    ENV_TAG_MESSAGE = "TAG_MESSAGE"
    ENV_AHEAD_POLICY = "AHEAD_POLICY"
    ENV_TAG_SOURCE = "TAG_SOURCE"
    ENV_TAG_SELECTION = "TAG_SELECTION"
    ENV_GIT_USER_NAME = "GIT_USER_NAME"
    ENV_GIT_USER_EMAIL = "GIT_USER_EMAIL"
    ENV_LOG_LEVEL = "TAGSYNC_LOG_LEVEL"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_GITHUB_REPOSITORY = "GITHUB_REPOSITORY"
    ENV_GITHUB_API_URL = "GITHUB_API_URL"
    ENV_GITHUB_OUTPUT = "GITHUB_OUTPUT"
    ENV_GITHUB_ACTIONS = "GITHUB_ACTIONS"

    # Repository API constants
    GITHUB_API_BASE = "https://api.github.com"
    REPO_API_PER_PAGE = 100
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
