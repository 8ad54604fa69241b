"""
Git client implementation for commit_assistant.

This module wraps the handful of Git operations the commit assistant
needs: locating the repository, reading the current branch, the staged
files and the staged diff, and finally creating a branch and committing.
All commands run through an injected :class:`CommandRunner` so that unit
tests can replace process execution entirely.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from commit_assistant.analysis.models import ChangeKind, StagedChange
from commit_assistant.vcs.runner import (
    CommandLaunchError,
    CommandResult,
    CommandRunner,
    CommandTimeoutError,
    SubprocessRunner,
)


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# First letter of a ``--name-status`` status code. Copies are reported as
# additions of the destination path.
STATUS_KINDS: Dict[str, ChangeKind] = {
    "A": ChangeKind.ADDED,
    "C": ChangeKind.ADDED,
    "M": ChangeKind.MODIFIED,
    "D": ChangeKind.DELETED,
    "R": ChangeKind.RENAMED,
    "T": ChangeKind.TYPE_CHANGED,
}


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path, runner: Optional[CommandRunner] = None) -> None:
        self.repo_root = repo_root
        self.runner = runner if runner is not None else SubprocessRunner(repo_root)

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached. Worktrees and submodules use a ``.git`` file
        rather than a directory, so any entry counts.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> CommandResult:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If git cannot be launched, or the command exits with a
            non-zero status when ``check`` is True.
        """
        logger.debug("Executing Git command: git %s", " ".join(args))
        try:
            result = self.runner.run("git", args)
        except (CommandLaunchError, CommandTimeoutError) as exc:
            raise GitError(str(exc)) from exc

        if check and not result.ok:
            logger.debug(
                "Git command failed: git %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(args),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip() or f"git {args[0]} failed")
        return result

    # ------------------------------------------------------------------
    # Repository state
    # ------------------------------------------------------------------
    def is_valid_repo(self) -> bool:
        """Return True if git recognises the repository root as a work tree."""
        try:
            result = self._run(["rev-parse", "--is-inside-work-tree"], check=False)
        except GitError:
            return False
        return result.ok and result.stdout.strip() == "true"

    def get_current_branch(self) -> str:
        """Get the name of the current branch.

        Returns ``"HEAD"`` when the repository is in detached HEAD state.

        Raises
        ------
        GitError
            If unable to determine the current branch.
        """
        result = self._run(["branch", "--show-current"], check=True)
        return result.stdout.strip() or "HEAD"

    def branch_exists(self, branch_name: str) -> bool:
        """Return True if a local branch called ``branch_name`` exists."""
        result = self._run(["branch", "--list", branch_name], check=False)
        return bool(result.stdout.strip())

    def get_staged_changes(self) -> List[StagedChange]:
        """Return the files staged for the next commit.

        Parses NUL-separated ``git diff --staged --name-status -z`` output,
        so paths with non-ASCII characters, tabs or quotes come back
        verbatim instead of C-quoted. Renamed and copied entries report
        their destination path.

        Raises
        ------
        GitError
            If the git command fails.
        """
        result = self._run(["diff", "--staged", "--name-status", "-z"], check=True)
        fields = result.stdout.split("\0")
        changes: List[StagedChange] = []
        index = 0
        while index < len(fields):
            status = fields[index].strip()
            index += 1
            if not status:
                continue
            # Renames and copies are followed by the source and destination paths.
            path_count = 2 if status[:1] in ("R", "C") else 1
            paths = fields[index:index + path_count]
            index += path_count
            if len(paths) < path_count or not paths[-1]:
                logger.debug("Skipping incomplete status entry: %r", status)
                continue
            kind = STATUS_KINDS.get(status[:1], ChangeKind.MODIFIED)
            changes.append(StagedChange(path=paths[-1], kind=kind))
        return changes

    def get_staged_diff(self) -> str:
        """Return the unified diff of all staged changes."""
        return self._run(["diff", "--staged"], check=True).stdout

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------
    def create_branch(self, branch_name: str) -> None:
        """Create and switch to a new branch (``git checkout -b``).

        Raises
        ------
        GitError
            If branch creation fails.
        """
        self._run(["checkout", "-b", branch_name], check=True)

    def commit(self, message: str) -> None:
        """Create a commit with the given message.

        Multi-line commit messages are supported. If the commit fails,
        a GitError is raised.
        """
        self._run(["commit", "-m", message], check=True)
