"""
Diff analysis helpers.

These functions turn the raw ``git diff --staged`` output and the list of
staged paths into the facts the suggestion engines work from: change
statistics, a per-file category summary and flags describing whether
files were added or deleted. They are pure and deterministic so that they
can be unit tested without a repository.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict, Iterable

from commit_assistant.analysis.models import (
    ChangePresence,
    DiffStats,
    FileCategory,
    FileSummary,
)


NULL_DEVICE = "/dev/null"

EXTENSION_CATEGORIES: Dict[str, FileCategory] = {
    "rs": FileCategory.SOURCE_CODE,
    "js": FileCategory.SOURCE_CODE,
    "ts": FileCategory.SOURCE_CODE,
    "py": FileCategory.SOURCE_CODE,
    "java": FileCategory.SOURCE_CODE,
    "go": FileCategory.SOURCE_CODE,
    "md": FileCategory.DOCS,
    "toml": FileCategory.CONFIG,
    "yaml": FileCategory.CONFIG,
    "yml": FileCategory.CONFIG,
    "json": FileCategory.CONFIG,
    "html": FileCategory.FRONTEND_ASSET,
    "css": FileCategory.FRONTEND_ASSET,
}


def compute_stats(diff: str) -> DiffStats:
    """Count changed files, added lines and deleted lines in a unified diff.

    Every ``+++``/``---`` header line that does not point at the null
    device counts towards the file boundary counter; each file contributes
    one header of each kind, so the counter is halved at the end.
    """
    boundaries = 0
    additions = 0
    deletions = 0
    for line in diff.splitlines():
        if line.startswith(("+++", "---")):
            if NULL_DEVICE not in line:
                boundaries += 1
        elif line.startswith("+"):
            additions += 1
        elif line.startswith("-"):
            deletions += 1
    return DiffStats(files_changed=boundaries // 2, additions=additions, deletions=deletions)


def categorize_path(path: str) -> FileCategory:
    """Return the :class:`FileCategory` of a single path based on its extension."""
    suffix = PurePosixPath(path.replace("\\", "/")).suffix
    if not suffix:
        return FileCategory.NO_EXTENSION
    return EXTENSION_CATEGORIES.get(suffix[1:].lower(), FileCategory.OTHER)


def summarize_files(paths: Iterable[str]) -> FileSummary:
    """Map each path to its category, preserving input order."""
    return [(path, categorize_path(path)) for path in paths]


def format_file_summary(summary: FileSummary) -> str:
    """Render a file summary as one ``- path (category)`` line per file."""
    if not summary:
        return "(no files)"
    return "\n".join(f"- {path} ({category.value})" for path, category in summary)


def detect_presence(diff: str) -> ChangePresence:
    """Detect whether the diff adds files, deletes files, or only modifies them."""
    has_new = "new file mode" in diff
    has_deleted = "deleted file mode" in diff
    only_modified = "diff --git" in diff and not has_new and not has_deleted
    return ChangePresence(
        has_new_files=has_new,
        has_deleted_files=has_deleted,
        only_modified=only_modified,
    )

