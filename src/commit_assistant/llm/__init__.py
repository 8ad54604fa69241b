"""
Language model integration for commit_assistant.

This package contains the :class:`LlmCliClient` for invoking a locally
installed LLM command line tool, the prompt builder and response parser,
and the :class:`ExternalSuggester` which ties them together with the
heuristic fallback.
"""

from .cli_client import LLMError, LlmCliClient  # noqa: F401
from .response_parser import ResponseParseError, parse_response  # noqa: F401
from .suggestion_generator import ExternalSuggester, SuggestionResult  # noqa: F401
