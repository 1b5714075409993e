"""Thin wrapper around the ``git`` binary.

Covers the porcelain the release run needs (stage, commit, annotated tag,
push, dirtiness check) plus local tag and branch lookups used when the
hosting API is not available.
"""
from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, redact, Timer

logger = logging.getLogger(__name__)


class GitCommandError(RuntimeError):
    """Raised when a git invocation exits non-zero or cannot be started."""

    def __init__(self, args: Sequence[str], returncode: Optional[int], stderr: str = ""):
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        detail = self.stderr.splitlines()[-1] if self.stderr else f"exit status {returncode}"
        super().__init__(f"git {' '.join(self.args_list)} failed: {redact(detail)}")


class GitClient:
    """Runs git commands inside one working tree."""

    def __init__(self, cwd: Optional[str] = None, remote: str = Constants.DEFAULT_REMOTE):
        self.cwd = cwd
        self.remote = remote

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return its stdout.

        Raises:
            GitCommandError: On a non-zero exit, a timeout or a missing binary.
        """
        cmd = ["git", *args]
        with Timer() as t:
            try:
                result = subprocess.run(
                    cmd,
                    cwd=self.cwd,
                    capture_output=True,
                    text=True,
                    timeout=Constants.GIT_TIMEOUT,
                    check=False,
                )
            except (OSError, subprocess.TimeoutExpired) as exc:
                raise GitCommandError(args, None, str(exc)) from exc
        if is_debug_enabled(logger):
            logger.debug(
                "git command",
                extra=extra_context(
                    event="subprocess",
                    component="git",
                    action=args[0] if args else None,
                    outcome="success" if result.returncode == 0 else "failure",
                    returncode=result.returncode,
                    duration_ms=t.duration_ms(),
                )
            )
        if result.returncode != 0:
            raise GitCommandError(args, result.returncode, result.stderr)
        return result.stdout

    def has_changes(self) -> bool:
        """Return True when the working tree has staged or unstaged changes."""
        return bool(self.run("status", "--porcelain").strip())

    def configure_identity(self, name: str, email: str) -> None:
        self.run("config", "user.name", name)
        self.run("config", "user.email", email)

    def add(self, paths: Sequence[str]) -> None:
        if paths:
            self.run("add", "--", *paths)

    def commit(self, message: str) -> None:
        self.run("commit", "-m", message)

    def tag(self, name: str, message: Optional[str] = None) -> None:
        """Create an annotated tag; the tag name doubles as message when none is given."""
        self.run("tag", "-a", name, "-m", message or name)

    def push(self, ref: str, force: bool = False) -> None:
        args = ["push", self.remote, ref]
        if force:
            args.append("--force")
        self.run(*args)

    def list_tags(self) -> List[str]:
        """Return local tag names, most recently created first."""
        output = self.run("tag", "--list", "--sort=-creatordate")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def current_branch(self) -> str:
        """Return the checked-out branch name.

        Raises:
            GitCommandError: When HEAD is detached.
        """
        branch = self.run("rev-parse", "--abbrev-ref", "HEAD").strip()
        if not branch or branch == "HEAD":
            raise GitCommandError(["rev-parse", "--abbrev-ref", "HEAD"], 0, "HEAD is detached")
        return branch
