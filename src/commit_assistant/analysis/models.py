"""
Data models shared by the suggestion pipeline.

The :class:`StagedChange` describes a single file staged for the next
commit, :class:`DiffStats` and :class:`ChangePresence` are derived from
the raw diff text, and :class:`SuggestionSet` carries the branch-name and
commit-message candidates offered to the user.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class ChangeKind(str, Enum):
    """Kind of a staged change as reported by ``git diff --name-status``."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    TYPE_CHANGED = "type-changed"


class FileCategory(str, Enum):
    """Coarse file category inferred from the file extension."""

    SOURCE_CODE = "source-code"
    DOCS = "markup/docs"
    CONFIG = "config"
    FRONTEND_ASSET = "frontend-asset"
    OTHER = "other"
    NO_EXTENSION = "no-extension"


@dataclass(frozen=True)
class StagedChange:
    """A file-level change already marked for inclusion in the next commit."""

    path: str
    kind: ChangeKind = ChangeKind.MODIFIED


@dataclass(frozen=True)
class DiffStats:
    """Change statistics computed from unified diff text."""

    files_changed: int = 0
    additions: int = 0
    deletions: int = 0

    def describe(self) -> str:
        """Return a ``git diff --stat`` style one-line summary."""
        return (
            f"{self.files_changed} file{'s' if self.files_changed != 1 else ''} changed, "
            f"{self.additions} insertion{'s' if self.additions != 1 else ''}(+), "
            f"{self.deletions} deletion{'s' if self.deletions != 1 else ''}(-)"
        )


@dataclass(frozen=True)
class ChangePresence:
    """Which kinds of file-level changes a diff contains."""

    has_new_files: bool = False
    has_deleted_files: bool = False
    only_modified: bool = False


# Ordered (path, category) pairs.
FileSummary = List[Tuple[str, FileCategory]]


@dataclass
class SuggestionSet:
    """Branch-name and commit-message candidates for one run.

    Attributes
    ----------
    branch_names : List[str]
        Up to three branch-name candidates, best first.
    commit_messages : List[str]
        Up to three commit-message candidates; a message may span
        several lines (subject, blank line, body).
    """

    branch_names: List[str] = field(default_factory=list)
    commit_messages: List[str] = field(default_factory=list)
