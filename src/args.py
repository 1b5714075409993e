"""Argument parsing functionality for tagsync."""

import argparse

from constants import Constants, TagSelection, TagSources

RELEASE_TYPES = ["patch", "minor", "major"]
AHEAD_POLICIES = ["patch-only", "any"]


def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Options left unset stay None so environment variables and the config
    file can fill them in (see cli_config.build_config).
    """
    parser = argparse.ArgumentParser(
        prog="tagsync",
        description=(
            "tagsync - Synchronize the version of JSON manifests with the "
            "repository tags, then commit, tag and push"
        ),
        add_help=True,
    )

    parser.add_argument("-t", "--release-type",
                        dest="RELEASE_TYPE",
                        help="Release kind: patch, minor or major (default: patch)",
                        action="store", type=str.lower,
                        choices=RELEASE_TYPES)
    parser.add_argument("-f", "--files",
                        dest="JSON_FILES",
                        help=f"JSON files holding a version key, space separated (default: {Constants.DEFAULT_JSON_FILES})",
                        action="append", type=str)
    parser.add_argument("-m", "--commit-message",
                        dest="COMMIT_MESSAGE",
                        help="Commit message template; {version} and {tag} are substituted",
                        action="store", type=str)
    parser.add_argument("--tag-message",
                        dest="TAG_MESSAGE",
                        help="Annotated tag message template; defaults to the tag name",
                        action="store", type=str)
    parser.add_argument("--ahead-policy",
                        dest="AHEAD_POLICY",
                        help="Adopt a file version ahead of the current tag only for patch releases (patch-only) or for every release type (any)",
                        action="store", type=str.lower,
                        choices=AHEAD_POLICIES)
    parser.add_argument("--tag-source",
                        dest="TAG_SOURCE",
                        help="Read tags from the GitHub API, local git, or auto-detect (default: auto)",
                        action="store", type=str.lower,
                        choices=[s.value for s in TagSources])
    parser.add_argument("--tag-selection",
                        dest="TAG_SELECTION",
                        help="Pick the current tag as the latest listed or the highest version (default: latest)",
                        action="store", type=str.lower,
                        choices=[s.value for s in TagSelection])
    parser.add_argument("-r", "--repository",
                        dest="REPOSITORY",
                        help="GitHub repository as owner/repo (default: $GITHUB_REPOSITORY)",
                        action="store", type=str)
    parser.add_argument("--git-user-name",
                        dest="GIT_USER_NAME",
                        help="Committer name",
                        action="store", type=str)
    parser.add_argument("--git-user-email",
                        dest="GIT_USER_EMAIL",
                        help="Committer email",
                        action="store", type=str)
    parser.add_argument("-n", "--dry-run",
                        dest="DRY_RUN",
                        help="Resolve and print the next tag without writing files or touching git",
                        action="store_true")

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    # Config file (general)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
