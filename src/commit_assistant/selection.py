"""
Interactive choice of the branch and the commit message.

:class:`SelectionFlow` implements the decision procedure on top of a
:class:`Chooser`, which only knows how to show a numbered menu, read a
line of text and display a block of text. :class:`ClickChooser` is the
terminal implementation built on ``click``; tests drive the flow with a
scripted chooser instead.

The commit message choice is an explicit loop between choosing a
candidate and previewing it. It ends only when the user confirms a
message, so "choose again" never loses the candidate list.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence

import click


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


INVALID_BRANCH_CHARS = frozenset(" ~^:?*[]\\")

USE_MESSAGE = "Use this message"
CHOOSE_AGAIN = "Choose again"


def is_valid_branch_name(name: str) -> bool:
    """Return True if ``name`` is acceptable as a new branch name.

    The name must be non-empty, must not start with ``/`` or ``.`` and
    must not contain whitespace or any of ``~ ^ : ? * [ ] \\``.
    """
    if not name or name.startswith(("/", ".")):
        return False
    return not any(ch in INVALID_BRANCH_CHARS or ch.isspace() for ch in name)


def first_line(message: str) -> str:
    """Return the first non-blank line of ``message``."""
    for line in message.splitlines():
        if line.strip():
            return line.strip()
    return message.strip()


class Chooser(Protocol):
    def select(self, prompt: str, options: Sequence[str], default: int = 0) -> int:
        """Show ``options`` and return the index of the chosen one."""
        ...

    def input_text(self, prompt: str) -> str:
        """Read one line of free text."""
        ...

    def show(self, text: str) -> None:
        """Display ``text`` verbatim."""
        ...

    def error(self, message: str) -> None:
        """Report invalid input."""
        ...


class ClickChooser:
    """Terminal chooser using numbered menus and ``click.prompt``."""

    def select(self, prompt: str, options: Sequence[str], default: int = 0) -> int:
        click.echo("")
        click.echo(click.style(prompt, bold=True))
        for number, option in enumerate(options, start=1):
            click.echo(f"   {number}. {option}")
        choice = click.prompt(
            "   Enter number",
            type=click.IntRange(1, len(options)),
            default=default + 1,
            show_default=True,
        )
        return choice - 1

    def input_text(self, prompt: str) -> str:
        return click.prompt(f"   {prompt}", default="", show_default=False)

    def show(self, text: str) -> None:
        click.echo("   ┌" + "─" * 56)
        for line in text.splitlines() or [""]:
            click.echo(f"   │ {line}")
        click.echo("   └" + "─" * 56)

    def error(self, message: str) -> None:
        click.echo(f"   ✗ {message}", err=True)


class CommitState(Enum):
    CHOOSE = "choose"
    PREVIEW = "preview"
    COMMITTED = "committed"


class SelectionFlow:
    """Branch and commit-message decision procedure.

    Parameters
    ----------
    chooser : Chooser
        Presents menus and reads input.
    branch_exists : Callable[[str], bool], optional
        Returns True for names of existing local branches; such names are
        neither offered nor accepted as new branches.
    """

    def __init__(
        self,
        chooser: Chooser,
        branch_exists: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self.chooser = chooser
        self.branch_exists = branch_exists

    # ------------------------------------------------------------------
    # Branch
    # ------------------------------------------------------------------
    def _exists(self, name: str) -> bool:
        return bool(self.branch_exists and self.branch_exists(name))

    def _offerable_branches(self, candidates: Sequence[str]) -> List[str]:
        offered: List[str] = []
        for candidate in candidates:
            name = candidate.strip()
            if not is_valid_branch_name(name):
                logger.warning("Dropping invalid branch suggestion: %r", candidate)
            elif self._exists(name):
                logger.info("Dropping branch suggestion '%s': branch already exists", name)
            elif name not in offered:
                offered.append(name)
        return offered

    def _custom_branch(self) -> str:
        while True:
            name = self.chooser.input_text("Enter the name for the new branch").strip()
            if not name:
                self.chooser.error("Branch name cannot be empty")
            elif not is_valid_branch_name(name):
                self.chooser.error("Branch name contains invalid characters")
            elif self._exists(name):
                self.chooser.error(f"Branch '{name}' already exists")
            else:
                return name

    def choose_branch(self, current: str, candidates: Sequence[str]) -> Optional[str]:
        """Ask which branch to commit on.

        Returns
        -------
        Optional[str]
            The name of a new branch to create, or ``None`` to keep the
            current branch.
        """
        offered = self._offerable_branches(candidates)
        options = [f"Keep current branch ({current})", *offered, "Custom branch name"]
        index = self.chooser.select("Choose a branch", options, default=0)

        if index == 0:
            return None
        if index == len(options) - 1:
            return self._custom_branch()
        return offered[index - 1]

    # ------------------------------------------------------------------
    # Commit message
    # ------------------------------------------------------------------
    def _custom_message(self) -> str:
        while True:
            message = self.chooser.input_text("Enter your commit message").strip()
            if message:
                return message
            self.chooser.error("Commit message cannot be empty")

    def choose_commit_message(self, candidates: Sequence[str]) -> str:
        """Ask for the commit message, with a preview and confirmation step.

        Only the first line of each candidate is listed in the menu; the
        full message is shown during the preview.

        Returns
        -------
        str
            The confirmed, trimmed, non-empty commit message.
        """
        offered = [c.strip() for c in candidates if c.strip()]
        options = [first_line(c) for c in offered] + ["Custom commit message"]

        state = CommitState.CHOOSE
        message = ""
        while state is not CommitState.COMMITTED:
            if state is CommitState.CHOOSE:
                index = self.chooser.select("Choose a commit message", options, default=0)
                message = offered[index] if index < len(offered) else self._custom_message()
                state = CommitState.PREVIEW
            else:
                self.chooser.show(message)
                confirm = self.chooser.select(
                    "Commit with this message?", [USE_MESSAGE, CHOOSE_AGAIN], default=0
                )
                state = CommitState.COMMITTED if confirm == 0 else CommitState.CHOOSE
        return message
