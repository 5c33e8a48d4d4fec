"""
Git log source for vc_changelog.

This module wraps the few Git commands needed to build a changelog:
reading the history since a tag and finding the most recent tag. All
subprocess calls go through :meth:`GitLogSource._run` so that unit tests
can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_EXCLUDE_GREP = "^Squash"


class SourceUnavailable(Exception):
    """Raised when a Git command fails or returns unusable output."""

    pass


class GitLogSource:
    """Read commit history and tags from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Command execution
    # ------------------------------------------------------------------
    def _run(self, args: List[str]) -> str:
        """Run a Git command in the repository root and return its output.

        Trailing whitespace is removed from the output.

        Raises
        ------
        SourceUnavailable
            If Git cannot be started, exits with a non-zero status or
            writes output that is not valid UTF-8.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
            )
        except UnicodeDecodeError as e:
            logger.error("Unicode decode error in Git output: %s", e)
            raise SourceUnavailable(f"git {args[0]} produced invalid UTF-8 output: {e}") from e
        except OSError as e:
            logger.error("Failed to execute Git: %s", e)
            raise SourceUnavailable(f"git {args[0]} failed: {e}") from e

        if result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            detail = result.stderr.strip() or result.stdout.strip()
            raise SourceUnavailable(f"git {args[0]} failed: {detail}" if detail else f"git {args[0]} failed")
        return result.stdout.rstrip()

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def fetch_log(self, since_tag: str, exclude_grep: str = DEFAULT_EXCLUDE_GREP) -> str:
        """Return the log of all commits after ``since_tag`` up to HEAD.

        Merge commits and commits whose message matches ``exclude_grep``
        are left out.
        """
        args = [
            "log",
            "--pretty=medium",
            "--date=rfc2822",
            "--no-merges",
            "--no-decorate",
            "--no-color",
        ]
        if exclude_grep:
            args += ["--invert-grep", "--grep", exclude_grep]
        # A tag starting with "-" must not be read as an option
        args += ["--end-of-options", f"{since_tag}..HEAD"]
        return self._run(args)

    def latest_tag(self) -> str:
        """Return the most recent tag reachable from HEAD."""
        return self._run(["describe", "--abbrev=0", "--tags"])
