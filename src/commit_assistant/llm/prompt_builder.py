"""
Prompt construction for the external LLM command.

The prompt is produced from a template containing named placeholders
(``{diff}``, ``{stats}``, ``{file_summary}``, ``{files}`` and ``{date}``).
Placeholders are substituted literally, so a template may contain other
braces or omit any placeholder without causing an error.
"""

from __future__ import annotations

import re
from textwrap import dedent
from typing import Dict, Optional, Sequence

from commit_assistant.analysis.models import DiffStats, FileSummary
from commit_assistant.analysis.diff_analyzer import format_file_summary


MAX_DIFF_BYTES = 8000
DIFF_HEAD_BYTES = 4000
DIFF_TAIL_BYTES = 4000

DEFAULT_PROMPT_TEMPLATE = dedent(
    """
    You are an expert software engineer helping a developer prepare a Git commit.
    Analyze the staged changes below and suggest branch names and commit messages.

    IMPORTANT: Output ONLY the two sections described below. Do NOT include:
    - Any thinking process or reasoning
    - Meta-commentary like "Here are the suggestions"
    - Markdown formatting, numbering or code fences

    OUTPUT FORMAT (strict):
    [BRANCHES]
    <type>/<short-description>-{date}
    <type>/<short-description>-{date}
    <type>/<short-description>-{date}
    [COMMITS]
    <type>: <subject line, max 72 characters>

    <optional body explaining what changed and why>

    <type>: <subject line>
    <type>: <subject line>

    RULES:
    - Exactly 3 branch names, one per line, lowercase words joined by hyphens.
      Branch types: feature, fix, refactor, docs, test, chore, config.
    - Exactly 3 commit messages. Each one starts with a type followed by a colon
      (feat, fix, docs, style, refactor, perf, test, chore). A body is optional
      and must be separated from the subject by a blank line.
    - Never start a body line with a word followed by a colon.

    CHANGE STATISTICS:
    {stats}

    FILES:
    {file_summary}

    DIFF:
    {diff}
    """
).strip()


def truncate_diff(
    diff: str,
    limit: int = MAX_DIFF_BYTES,
    head: int = DIFF_HEAD_BYTES,
    tail: int = DIFF_TAIL_BYTES,
) -> str:
    """Shorten a diff that exceeds ``limit`` bytes.

    The first ``head`` and last ``tail`` bytes (UTF-8) are kept and joined
    by an elision marker so both the start and the end of the change stay
    visible. Multi-byte characters cut at a boundary are dropped.
    """
    encoded = diff.encode("utf-8")
    if len(encoded) <= limit:
        return diff
    omitted = len(encoded) - head - tail
    start = encoded[:head].decode("utf-8", errors="ignore")
    end = encoded[-tail:].decode("utf-8", errors="ignore") if tail else ""
    return f"{start}\n\n... [diff truncated: {omitted} bytes omitted] ...\n\n{end}"


def build_prompt(
    template: str,
    stats: DiffStats,
    summary: FileSummary,
    files: Sequence[str],
    diff: str,
    date_stamp: Optional[str] = None,
) -> str:
    """Fill ``template`` with the change facts.

    Parameters
    ----------
    template : str
        Prompt template with named placeholders.
    stats : DiffStats
        Statistics of the staged diff.
    summary : FileSummary
        Per-file category summary.
    files : Sequence[str]
        Staged file paths.
    diff : str
        Raw staged diff; it is truncated with :func:`truncate_diff`.
    date_stamp : str, optional
        ``YYYYMMDD`` stamp substituted for ``{date}``. The placeholder is
        left untouched when omitted.

    Returns
    -------
    str
        The prompt with every known placeholder substituted.
    """
    values: Dict[str, str] = {
        "{stats}": stats.describe(),
        "{file_summary}": format_file_summary(summary),
        "{files}": "\n".join(f"- {f}" for f in files) if files else "(no files)",
        "{diff}": truncate_diff(diff),
    }
    if date_stamp is not None:
        values["{date}"] = date_stamp

    # Substitute in one pass so text inserted for one placeholder (such as
    # a diff containing "{files}") is never expanded again.
    pattern = re.compile("|".join(re.escape(placeholder) for placeholder in values))
    return pattern.sub(lambda match: values[match.group(0)], template)
