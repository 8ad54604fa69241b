"""
Configuration loader for commit_assistant.

The tool reads an optional TOML file named ``config.toml`` located in the
``~/.config/git-auto-commit/`` directory. It describes how to invoke the
external LLM command line tool. Every field is optional: a missing field,
or one with the wrong type, takes its documented default.

A missing file simply yields the defaults. A file that cannot be read, is
not UTF-8 or is not valid TOML raises :class:`ConfigError`; callers are
expected to report it as a warning and continue with :class:`LlmConfig` defaults.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from commit_assistant.llm.prompt_builder import DEFAULT_PROMPT_TEMPLATE


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = "config.toml"
DEFAULT_TIMEOUT = 120.0


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or parsed."""

    pass


@dataclass(frozen=True)
class LlmConfig:
    """How to invoke the external LLM command.

    Attributes
    ----------
    command : str
        Executable to run, e.g. ``"gemini"``. An empty string disables the
        external tool so that only heuristic suggestions are offered.
    prompt_flag : str
        Flag preceding the prompt argument.
    model_flag : str
        Flag preceding the model name.
    model : str
        Model name passed after ``model_flag``.
    extra_args : Tuple[str, ...]
        Additional arguments appended to the command line.
    combined_prompt : str
        Prompt template; see :mod:`commit_assistant.llm.prompt_builder`.
    timeout : float
        Seconds to wait for the command before giving up.
    """

    command: str = "gemini"
    prompt_flag: str = "-p"
    model_flag: str = "--model"
    model: str = "gemini-2.5-flash"
    extra_args: Tuple[str, ...] = field(default_factory=tuple)
    combined_prompt: str = DEFAULT_PROMPT_TEMPLATE
    timeout: float = DEFAULT_TIMEOUT


def _get_config_directory() -> Path:
    """Get the per-user configuration directory.

    Returns:
        Path to the ``~/.config/git-auto-commit/`` directory.
    """
    return Path.home() / ".config" / "git-auto-commit"


def get_config_path() -> Path:
    """Return the full path of the configuration file."""
    return _get_config_directory() / CONFIG_FILE_NAME


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def config_from_mapping(data: Dict[str, Any]) -> LlmConfig:
    """Build an :class:`LlmConfig` from parsed TOML data.

    Unknown keys are ignored. A known key whose value has the wrong type
    is logged as a warning and replaced by its default.
    """
    known = {f.name for f in fields(LlmConfig)}
    for key in data:
        if key not in known:
            logger.debug("Ignoring unknown configuration key '%s'", key)

    values: Dict[str, Any] = {}
    for name in ("command", "prompt_flag", "model_flag", "model", "combined_prompt"):
        if name not in data:
            continue
        if isinstance(data[name], str):
            values[name] = data[name]
        else:
            logger.warning("Configuration key '%s' must be a string; using default", name)

    if "extra_args" in data:
        if _is_string_list(data["extra_args"]):
            values["extra_args"] = tuple(data["extra_args"])
        else:
            logger.warning("Configuration key 'extra_args' must be a list of strings; using default")

    if "timeout" in data:
        if _is_positive_number(data["timeout"]):
            values["timeout"] = float(data["timeout"])
        else:
            logger.warning("Configuration key 'timeout' must be a positive number; using default")

    return LlmConfig(**values)


def load_config(config_path: Optional[Path] = None) -> LlmConfig:
    """Load the LLM configuration and return it.

    Args:
        config_path: File to read. Defaults to :func:`get_config_path`.

    Returns:
        The configuration, with defaults for every absent or invalid field.

    Raises:
        ConfigError: If the file exists but cannot be read, is not valid
            UTF-8, or is not valid TOML.
    """
    path = config_path if config_path is not None else get_config_path()

    if not path.exists():
        logger.debug("No configuration file at '%s'; using defaults", path)
        return LlmConfig()

    try:
        with path.open("rb") as handle:
            data: Dict[str, Any] = tomllib.load(handle)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.debug("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid configuration file {path}: {exc}") from exc

    config = config_from_mapping(data)
    logger.debug("Loaded LLM configuration from: %s", path)
    logger.debug("Command: %s, model: %s", config.command, config.model)
    return config
