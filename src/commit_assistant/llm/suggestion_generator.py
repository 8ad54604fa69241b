"""
Suggestion generation using an external LLM command.

This module provides the :class:`ExternalSuggester` class, which builds a
prompt from the staged diff, invokes the configured LLM command line tool
and parses its structured answer into a :class:`SuggestionSet`. If the
tool cannot be run, fails, or answers with something that cannot be
parsed, the deterministic :class:`HeuristicSuggester` is used instead and
the reason is reported as a warning. Suggestion generation never fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Optional, Sequence

from commit_assistant.analysis.diff_analyzer import compute_stats, detect_presence, summarize_files
from commit_assistant.analysis.models import SuggestionSet
from commit_assistant.heuristics.suggester import HeuristicSuggester, date_stamp
from commit_assistant.llm.cli_client import LLMError, LlmCliClient
from commit_assistant.llm.prompt_builder import build_prompt
from commit_assistant.llm.response_parser import ResponseParseError, parse_response
from commit_assistant.vcs.runner import CommandRunner

if TYPE_CHECKING:
    from commit_assistant.config.loader import LlmConfig


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


SOURCE_EXTERNAL = "external"
SOURCE_HEURISTIC = "heuristic"


@dataclass
class SuggestionResult:
    """Suggestions together with where they came from.

    Attributes
    ----------
    suggestions : SuggestionSet
        The branch-name and commit-message candidates.
    source : str
        ``"external"`` when the LLM command produced the suggestions,
        ``"heuristic"`` when the fallback engine did.
    warning : str, optional
        Why the external tool was not used, if it failed.
    """

    suggestions: SuggestionSet
    source: str
    warning: Optional[str] = None


class ExternalSuggester:
    """Generate suggestions with an LLM command, falling back to heuristics."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        heuristics: Optional[HeuristicSuggester] = None,
        today: Optional[date] = None,
    ) -> None:
        self.runner = runner
        self.today = today
        self.heuristics = heuristics if heuristics is not None else HeuristicSuggester(today)

    def _client(self, config: "LlmConfig") -> LlmCliClient:
        return LlmCliClient(
            command=config.command,
            prompt_flag=config.prompt_flag,
            model_flag=config.model_flag,
            model=config.model,
            extra_args=config.extra_args,
            timeout=config.timeout,
            runner=self.runner,
        )

    def _fallback(self, diff: str, files: Sequence[str], warning: Optional[str]) -> SuggestionResult:
        suggestions = self.heuristics.suggest(files, detect_presence(diff))
        return SuggestionResult(suggestions=suggestions, source=SOURCE_HEURISTIC, warning=warning)

    def generate(self, diff: str, files: Sequence[str], config: "LlmConfig") -> SuggestionResult:
        """Produce suggestions for the staged ``diff`` touching ``files``.

        Parameters
        ----------
        diff : str
            Raw staged diff.
        files : Sequence[str]
            Staged file paths.
        config : LlmConfig
            How to invoke the external command. An empty ``command``
            skips the external tool.

        Returns
        -------
        SuggestionResult
            Never empty: at least one branch name and one commit message.
        """
        if not config.command:
            logger.info("No external LLM command configured; using heuristic suggestions")
            return self._fallback(diff, files, None)

        prompt = build_prompt(
            config.combined_prompt,
            compute_stats(diff),
            summarize_files(files),
            files,
            diff,
            date_stamp(self.today),
        )
        try:
            response = self._client(config).generate(prompt)
            suggestions = parse_response(response, self.today)
        except (LLMError, ResponseParseError) as exc:
            logger.info("External suggestions unavailable: %s; using heuristic fallback.", exc)
            return self._fallback(diff, files, str(exc))

        if not suggestions.commit_messages:
            # Branch names were usable but no commit message was; the
            # heuristic messages keep at least one candidate on offer.
            logger.info("External tool returned no commit messages; using heuristic messages.")
            fallback = self.heuristics.suggest(files, detect_presence(diff))
            suggestions.commit_messages = fallback.commit_messages
            return SuggestionResult(
                suggestions=suggestions,
                source=SOURCE_EXTERNAL,
                warning="external tool returned no commit messages",
            )

        return SuggestionResult(suggestions=suggestions, source=SOURCE_EXTERNAL)
