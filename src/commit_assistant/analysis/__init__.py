"""
Diff analysis for commit_assistant.

See :mod:`commit_assistant.analysis.diff_analyzer` for the statistics and
file categorisation helpers and :mod:`commit_assistant.analysis.models`
for the shared data model.
"""

from .diff_analyzer import compute_stats, detect_presence, summarize_files  # noqa: F401
from .models import (  # noqa: F401
    ChangeKind,
    ChangePresence,
    DiffStats,
    FileCategory,
    StagedChange,
    SuggestionSet,
)
