"""tagsync - keep JSON manifest versions and repository tags in step.

Prints the resulting tag name and exits with one of ``ExitCodes``.
"""
import logging
import os
import sys

from args import parse_args
from cli_config import ConfigError, build_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from release import run_release
from repository.git import GitCommandError
from repository.github import RepositoryError
from versioning.manifest import ManifestError
from versioning.resolver import ResolutionError

# exception type -> exit code, checked in order
_FAILURES = (
    (ConfigError, ExitCodes.CONFIG_ERROR),
    (RepositoryError, ExitCodes.CONNECTION_ERROR),
    (GitCommandError, ExitCodes.GIT_ERROR),
    (ResolutionError, ExitCodes.RESOLUTION_ERROR),
    (ManifestError, ExitCodes.FILE_ERROR),
    (OSError, ExitCodes.FILE_ERROR),
)


def report_failure(message: str) -> None:
    """Log a single-line failure and surface it as a workflow error annotation."""
    logging.error("%s", message)
    if os.environ.get(Constants.ENV_GITHUB_ACTIONS) == "true":
        print(f"::error::{message}")


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)

    try:
        configure_logging(args.LOG_LEVEL, args.LOG_FILE, args.QUIET)
        if is_debug_enabled(logger):
            logger.debug(
                "CLI start",
                extra=extra_context(event="function_entry", component="cli", action="main")
            )
        config = build_config(args)
        outcome = run_release(config)
    except tuple(exc_type for exc_type, _ in _FAILURES) as exc:
        report_failure(str(exc))
        code = next(code for exc_type, code in _FAILURES if isinstance(exc, exc_type))
        sys.exit(code.value)

    if outcome.updated and not outcome.dry_run:
        logger.info(
            "Pushed %s to %s; rewrote %s",
            outcome.tag_name,
            outcome.branch,
            ", ".join(outcome.files_written) or "no files",
        )
    print(outcome.tag_name)
    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="main",
                outcome="updated" if outcome.updated else "unchanged"
            )
        )
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
