"""
Process execution for commit_assistant.

Every external program the tool starts (``git`` as well as the LLM CLI)
goes through a :class:`CommandRunner`. The default implementation,
:class:`SubprocessRunner`, wraps :func:`subprocess.run`; tests inject a
fake runner instead so that no real process is spawned.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished process."""

    exit_status: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


class CommandLaunchError(Exception):
    """Raised when a command cannot be started (e.g. it is not installed)."""

    pass


class CommandTimeoutError(Exception):
    """Raised when a command does not finish within its timeout."""

    pass


class CommandRunner(Protocol):
    def run(
        self,
        command: str,
        args: Sequence[str],
        timeout: Optional[float] = None,
    ) -> CommandResult:
        ...


class SubprocessRunner:
    """Run commands with :func:`subprocess.run`, capturing decoded output.

    Parameters
    ----------
    cwd : Path, optional
        Working directory for every command. Defaults to the current
        directory of the process.
    """

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = cwd

    def run(
        self,
        command: str,
        args: Sequence[str],
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """Run ``command`` with ``args`` and return its exit status and output.

        Output is decoded as UTF-8, replacing undecodable bytes.

        Raises
        ------
        CommandLaunchError
            If the executable cannot be found or started.
        CommandTimeoutError
            If ``timeout`` seconds elapse before the command exits.
        """
        full_cmd = [command, *args]
        # Arguments may hold a whole prompt, so only their count is logged.
        logger.debug("Executing command: %s (%d argument(s))", command, len(args))
        try:
            completed = subprocess.run(
                full_cmd,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            logger.debug("Command '%s' timed out after %s seconds", command, timeout)
            raise CommandTimeoutError(f"'{command}' did not finish within {timeout} seconds") from exc
        except OSError as exc:
            logger.debug("Failed to launch '%s': %s", command, exc)
            raise CommandLaunchError(f"Could not run '{command}': {exc}") from exc
        return CommandResult(
            exit_status=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
