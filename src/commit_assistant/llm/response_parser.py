"""
Parsing of structured suggestions from free-form LLM output.

The external tool is asked to answer with two sections::

    [BRANCHES]
    feature/add-login-20240101
    ...
    [COMMITS]
    feat: add login form

    Explain what changed and why.
    fix: handle empty password

Everything before ``[BRANCHES]`` is ignored. In the branch section every
non-empty line containing a ``/`` is a candidate. The commit section is
scanned line by line: a line whose text before the first colon is a short
word (an ASCII letter followed by letters, digits or hyphens) starts a new
commit message, and all following lines up to the next such line form its
body. This accepts ``feat:``/``fix:`` style prefixes while ignoring lines
that merely contain a colon, such as URLs or times.
"""

from __future__ import annotations

import logging
import string
from datetime import date
from typing import List, Optional

from commit_assistant.analysis.models import SuggestionSet
from commit_assistant.heuristics.suggester import MAX_SUGGESTIONS, backfill, generic_branch_names


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


BRANCHES_MARKER = "[BRANCHES]"
COMMITS_MARKER = "[COMMITS]"

_PREFIX_CHARS = frozenset(string.ascii_letters + string.digits + "-")


class ResponseParseError(ValueError):
    """Raised when a response carries no usable suggestions."""

    pass


def is_commit_boundary(line: str) -> bool:
    """Return True if ``line`` starts a new commit message.

    The text before the first ``:`` must be non-empty, start with an ASCII
    letter and contain only ASCII letters, digits and hyphens.

    >>> is_commit_boundary("feat: add login")
    True
    >>> is_commit_boundary("see https://example.com")
    False
    """
    prefix, colon, _ = line.strip().partition(":")
    if not colon or not prefix:
        return False
    return prefix[0] in string.ascii_letters and all(ch in _PREFIX_CHARS for ch in prefix)


def parse_branches(section: str) -> List[str]:
    """Return every non-empty line of ``section`` that contains a ``/``."""
    branches: List[str] = []
    for line in section.splitlines():
        candidate = line.strip()
        if candidate and "/" in candidate:
            branches.append(candidate)
    return branches


def parse_commits(section: str) -> List[str]:
    """Group the lines of ``section`` into commit messages.

    Lines before the first boundary line are discarded. Every blank line
    appends a line separator to the message being collected, so blank
    runs inside a body survive as written; leading and trailing blank
    lines are trimmed when the message is finalised.
    """
    commits: List[str] = []
    current: Optional[List[str]] = None

    for raw_line in section.splitlines():
        line = raw_line.rstrip()
        if is_commit_boundary(line):
            if current:
                commits.append("\n".join(current).strip())
            current = [line.strip()]
        elif not line.strip():
            if current is not None:
                current.append("")
        elif current is not None:
            current.append(line)

    if current:
        commits.append("\n".join(current).strip())
    return commits


def parse_response(text: str, today: Optional[date] = None) -> SuggestionSet:
    """Extract branch names and commit messages from an LLM response.

    Parameters
    ----------
    text : str
        Raw response text.
    today : date, optional
        Date used for the stamps of backfilled branch names.

    Returns
    -------
    SuggestionSet
        Exactly three branch names (backfilled with generic date-stamped
        names when the response offers fewer) and between one and three
        commit messages. Commit messages are never backfilled.

    Raises
    ------
    ResponseParseError
        If either marker is missing, or neither section yields anything.
    """
    branches_at = text.find(BRANCHES_MARKER)
    if branches_at < 0:
        raise ResponseParseError(f"unstructured response: missing {BRANCHES_MARKER} marker")
    branches_end = branches_at + len(BRANCHES_MARKER)
    commits_at = text.find(COMMITS_MARKER, branches_end)
    if commits_at < 0:
        raise ResponseParseError(f"unstructured response: missing {COMMITS_MARKER} marker")

    branches = parse_branches(text[branches_end:commits_at])[:MAX_SUGGESTIONS]
    commits = parse_commits(text[commits_at + len(COMMITS_MARKER):])[:MAX_SUGGESTIONS]
    logger.debug("Parsed %d branch name(s) and %d commit message(s)", len(branches), len(commits))

    if not branches and not commits:
        raise ResponseParseError("response contained no branch names or commit messages")

    return SuggestionSet(
        branch_names=backfill(branches, generic_branch_names(today)),
        commit_messages=commits,
    )
