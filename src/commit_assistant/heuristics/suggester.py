"""
Heuristic branch-name and commit-message suggestions.

The suggester looks only at staged file names and at the presence flags
derived from the diff, so it is deterministic and needs neither a
language model nor any I/O. It is the fallback used whenever the external
LLM command is unavailable or answers with something unusable, and it
always produces between one and three candidates per list.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import PurePosixPath
from typing import Iterable, List, Optional, Sequence

from commit_assistant.analysis.models import ChangePresence, SuggestionSet


MAX_SUGGESTIONS = 3

DOC_EXTENSIONS = {"md", "txt", "doc"}
CONFIG_EXTENSIONS = {"json", "yaml", "yml", "toml", "ini", "conf"}
CODE_EXTENSIONS = {"rs", "js", "ts", "py", "java", "go"}
STYLE_EXTENSIONS = {"css", "scss", "sass", "less"}
TEST_MARKERS = ("test", "spec")

GENERIC_COMMIT_MESSAGES = (
    "chore: update project files",
    "refactor: improve code quality",
    "chore: routine maintenance",
    "chore: adjust file contents",
    "chore: modify project files",
)

GENERIC_BRANCH_TEMPLATES = (
    "feature/update-{date}",
    "refactor/improve-code-{date}",
    "chore/maintenance-{date}",
)


def date_stamp(today: Optional[date] = None) -> str:
    """Return the ``YYYYMMDD`` stamp used in generated branch names."""
    return (today or date.today()).strftime("%Y%m%d")


def generic_branch_names(today: Optional[date] = None) -> List[str]:
    """Return the date-stamped generic branch names used for backfilling."""
    stamp = date_stamp(today)
    return [template.format(date=stamp) for template in GENERIC_BRANCH_TEMPLATES]


def backfill(suggestions: List[str], pool: Iterable[str], limit: int = MAX_SUGGESTIONS) -> List[str]:
    """Append entries from ``pool`` until ``limit`` unique suggestions exist.

    Duplicates are skipped and the result is truncated to ``limit``.
    """
    result = list(suggestions)
    for candidate in pool:
        if len(result) >= limit:
            break
        if candidate not in result:
            result.append(candidate)
    return result[:limit]


def _extension(path: str) -> str:
    return PurePosixPath(path.replace("\\", "/")).suffix[1:].lower()


def _any_extension(files: Sequence[str], extensions: set) -> bool:
    return any(_extension(f) in extensions for f in files)


def _any_marker(files: Sequence[str], markers: Iterable[str]) -> bool:
    lowered = [f.lower() for f in files]
    return any(marker in f for f in lowered for marker in markers)


@dataclass(frozen=True)
class _FileTraits:
    docs: bool
    config: bool
    code: bool
    styles: bool
    tests: bool

    @classmethod
    def of(cls, files: Sequence[str]) -> "_FileTraits":
        return cls(
            docs=_any_extension(files, DOC_EXTENSIONS),
            config=_any_extension(files, CONFIG_EXTENSIONS),
            code=_any_extension(files, CODE_EXTENSIONS),
            styles=_any_extension(files, STYLE_EXTENSIONS),
            tests=_any_marker(files, TEST_MARKERS),
        )


def suggest_commit_messages(files: Sequence[str], presence: ChangePresence) -> List[str]:
    """Propose up to three commit messages from file names and change kinds.

    Parameters
    ----------
    files : Sequence[str]
        Staged file paths relative to the repository root.
    presence : ChangePresence
        Flags computed from the staged diff.

    Returns
    -------
    List[str]
        Exactly three unique commit messages, most specific first.

    Notes
    -----
    Added files take priority over deleted files, which take priority over
    pure modifications. Within modifications the first matching category
    wins in the order docs, config, tests, source code, stylesheets.
    """
    traits = _FileTraits.of(files)
    suggestions: List[str] = []

    if presence.has_new_files:
        if len(files) == 1:
            suggestions.append(f"feat: add {files[0]}")
        else:
            suggestions.append("feat: add new files")
        if traits.docs:
            suggestions.append("docs: add project documentation")
        elif traits.config:
            suggestions.append("chore: add configuration files")
        elif traits.code:
            suggestions.append("feat: add new module")
    elif presence.has_deleted_files:
        if len(files) == 1:
            suggestions.append(f"chore: remove {files[0]}")
        else:
            suggestions.append("chore: remove unused files")
        suggestions.append("chore: clean up obsolete code")
        suggestions.append("refactor: remove redundant files")
    elif presence.only_modified:
        if traits.docs:
            suggestions.append("docs: update project documentation")
            suggestions.append("docs: fix documentation content")
        elif traits.config:
            suggestions.append("chore: adjust project settings")
            suggestions.append("chore: update config files")
        elif traits.tests:
            suggestions.append("test: update test cases")
            suggestions.append("test: fix tests")
        elif traits.code:
            suggestions.append("fix: fix bug")
            suggestions.append("perf: improve performance")
            suggestions.append("refactor: restructure code")
        elif traits.styles:
            suggestions.append("style: adjust styles")
            suggestions.append("ui: update user interface")

    return backfill(suggestions, GENERIC_COMMIT_MESSAGES)


def suggest_branch_names(files: Sequence[str], today: Optional[date] = None) -> List[str]:
    """Propose up to three date-stamped branch names from file names.

    Keyword rules are applied in a fixed order (feature, fix, docs, config,
    tests); the generic pool backfills the list to three entries.
    """
    stamp = date_stamp(today)
    traits = _FileTraits.of(files)
    suggestions: List[str] = []

    if _any_marker(files, ("feature", "add")):
        suggestions.append(f"feature/new-feature-{stamp}")
    if _any_marker(files, ("fix", "bug")):
        suggestions.append(f"fix/bug-fix-{stamp}")
    if traits.docs:
        suggestions.append(f"docs/update-docs-{stamp}")
    if traits.config:
        suggestions.append(f"config/update-config-{stamp}")
    if traits.tests:
        suggestions.append(f"test/update-tests-{stamp}")

    return backfill(suggestions[:MAX_SUGGESTIONS], generic_branch_names(today))


class HeuristicSuggester:
    """Rule-based fallback engine producing a :class:`SuggestionSet`."""

    def __init__(self, today: Optional[date] = None) -> None:
        self.today = today

    def suggest(self, files: Sequence[str], presence: ChangePresence) -> SuggestionSet:
        return SuggestionSet(
            branch_names=suggest_branch_names(files, self.today),
            commit_messages=suggest_commit_messages(files, presence),
        )
