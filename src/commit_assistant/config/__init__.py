"""
Configuration loading for commit_assistant.

Provides a loader for the optional TOML file describing how to invoke
the external LLM command. See :mod:`commit_assistant.config.loader` for
implementation details.
"""

from .loader import ConfigError, LlmConfig, load_config  # noqa: F401
