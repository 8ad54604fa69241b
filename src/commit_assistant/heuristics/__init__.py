"""
Heuristic suggestion engine.

This package provides the deterministic fallback used when no external
language model is available. See
:mod:`commit_assistant.heuristics.suggester` for details.
"""

from .suggester import (  # noqa: F401
    HeuristicSuggester,
    suggest_branch_names,
    suggest_commit_messages,
)
