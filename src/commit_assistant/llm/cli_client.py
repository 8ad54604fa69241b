"""
Client for a locally installed LLM command line tool.

The client runs ``<command> <prompt_flag> <prompt> <model_flag> <model>
<extra_args...>`` through a :class:`CommandRunner` and returns the
captured standard output. On error conditions (the command cannot be
started, it times out, or it exits with a non-zero status) an
:class:`LLMError` is raised.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from commit_assistant.vcs.runner import (
    CommandLaunchError,
    CommandRunner,
    CommandTimeoutError,
    SubprocessRunner,
)


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class LLMError(Exception):
    """Raised when the external LLM command fails."""

    pass


def strip_thinking_tags(text: str) -> str:
    """Remove thinking process tags from LLM responses.

    Reasoning models often print their thinking process in XML-like tags
    such as <think>, <thinking>, <thought>, or <reasoning>. This function
    strips these tags and their contents, leaving only the actual output.

    Examples
    --------
    >>> strip_thinking_tags("<think>reasoning...</think>Answer")
    'Answer'
    >>> strip_thinking_tags("<thinking>thoughts</thinking>\\n\\nReal answer")
    'Real answer'
    """
    thinking_patterns = [
        r'<think>.*?</think>',
        r'<thinking>.*?</thinking>',
        r'<thought>.*?</thought>',
        r'<reasoning>.*?</reasoning>',
    ]

    result = text
    for pattern in thinking_patterns:
        result = re.sub(pattern, '', result, flags=re.DOTALL | re.IGNORECASE)

    return result.strip()


def build_arguments(
    prompt_flag: str,
    prompt: str,
    model_flag: str,
    model: str,
    extra_args: Sequence[str] = (),
) -> List[str]:
    """Return the argument vector passed to the LLM command.

    Empty flags are omitted so that tools taking the prompt as a bare
    positional argument can be configured with ``prompt_flag = ""``. An
    empty ``model`` drops the model flag as well, so the tool picks its
    own default model.
    """
    args: List[str] = []
    if prompt_flag:
        args.append(prompt_flag)
    args.append(prompt)
    if model:
        if model_flag:
            args.append(model_flag)
        args.append(model)
    args.extend(extra_args)
    return args


class LlmCliClient:
    """Invoke an LLM command line tool.

    Parameters
    ----------
    command : str
        Executable name or path, e.g. ``"gemini"``.
    prompt_flag : str
        Flag placed before the prompt, e.g. ``"-p"``.
    model_flag : str
        Flag placed before the model name, e.g. ``"--model"``.
    model : str
        Model name.
    extra_args : Sequence[str], optional
        Additional arguments appended after the model.
    timeout : float, optional
        Seconds to wait for the command. ``None`` waits forever.
    runner : CommandRunner, optional
        Process runner; defaults to :class:`SubprocessRunner`.
    """

    def __init__(
        self,
        command: str,
        prompt_flag: str = "-p",
        model_flag: str = "--model",
        model: str = "",
        extra_args: Sequence[str] = (),
        timeout: Optional[float] = None,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        self.command = command
        self.prompt_flag = prompt_flag
        self.model_flag = model_flag
        self.model = model
        self.extra_args = tuple(extra_args)
        self.timeout = timeout
        self.runner = runner if runner is not None else SubprocessRunner()

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` to the command and return its cleaned output.

        Raises
        ------
        LLMError
            If the command cannot be started, times out, or exits with a
            non-zero status.
        """
        args = build_arguments(self.prompt_flag, prompt, self.model_flag, self.model, self.extra_args)
        try:
            result = self.runner.run(self.command, args, timeout=self.timeout)
        except CommandLaunchError as exc:
            raise LLMError(
                f"Could not run '{self.command}'. Make sure the {self.command} CLI is installed: {exc}"
            ) from exc
        except CommandTimeoutError as exc:
            raise LLMError(str(exc)) from exc

        if not result.ok:
            logger.debug(
                "LLM command exited with status %s: %s", result.exit_status, result.stderr
            )
            detail = result.stderr.strip() or result.stdout.strip()
            raise LLMError(f"'{self.command}' exited with status {result.exit_status}: {detail}")

        logger.debug("LLM command returned %d characters", len(result.stdout))
        return strip_thinking_tags(result.stdout)
