"""
Command line interface for the commit_assistant tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``git-auto-commit`` command. It orchestrates
repository detection, reading the staged changes, configuration loading,
suggestion generation, the interactive branch and commit-message choice,
and finally the branch switch and commit.

No git state is changed until both choices have been made, so aborting a
prompt (Ctrl-C) never leaves a half-finished run behind.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

import click

from commit_assistant import __version__
from commit_assistant.analysis.diff_analyzer import compute_stats
from commit_assistant.config.loader import ConfigError, LlmConfig, get_config_path, load_config
from commit_assistant.llm.suggestion_generator import SOURCE_EXTERNAL, ExternalSuggester
from commit_assistant.selection import ClickChooser, SelectionFlow
from commit_assistant.vcs.git_client import GitClient, GitError
from commit_assistant.vcs.runner import SubprocessRunner


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_NO_CHANGES = 4
EXIT_VCS_FAILURE = 6


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = 0.0

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"⠋ {self.message}...", nl=False)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.time() - self.start_time
        if exc_type is None:
            click.echo(f"\r✓ {self.message} (took {elapsed:.1f}s)")
        else:
            click.echo(f"\r✗ {self.message}")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def detect_repo(start_dir: Path) -> Path:
    """Return the root of the Git repository containing ``start_dir``.

    Raises
    ------
    click.exceptions.Exit
        With code EXIT_NO_REPO if no repository is found.
    """
    repo_root = GitClient.find_repo_root(start_dir)
    if repo_root is None:
        print_error("Current directory is not inside a Git repository.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    return repo_root


def load_llm_config() -> LlmConfig:
    """Load the LLM configuration, falling back to defaults on any problem."""
    try:
        config = load_config()
    except ConfigError as exc:
        print_warning(f"{exc}; using default settings")
        return LlmConfig()
    if get_config_path().exists():
        print_info(f"Loaded configuration from {get_config_path()}", indent=1)
    return config


def show_staged_files(paths: List[str]) -> None:
    print_success(f"Found {len(paths)} staged file{'s' if len(paths) != 1 else ''}")
    for path in paths[:10]:
        print_info(path, indent=1)
    if len(paths) > 10:
        print_info(f"... and {len(paths) - 10} more", indent=1)


@click.command()
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="git-auto-commit")
def main(verbose: bool) -> None:
    """🚀 Suggest a branch name and commit message for your staged changes.

    Stage files with ``git add`` first, then run this command inside the
    repository. Suggestions come from the configured LLM command line tool
    or, when it is unavailable, from built-in heuristics.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    click.echo("\n" + "="*60)
    click.echo("🚀 Git Auto Commit".center(60))
    click.echo("="*60)

    ctx = click.get_current_context(silent=True)
    total_steps = 4

    try:
        # Step 1: Repository and staged changes
        print_step(1, total_steps, "Reading Staged Changes")
        repo_root = detect_repo(Path.cwd())
        runner = SubprocessRunner(repo_root)
        client = GitClient(repo_root, runner)
        if not client.is_valid_repo():
            print_error(f"'{repo_root}' is not a valid Git work tree.")
            raise click.exceptions.Exit(EXIT_NO_REPO)

        try:
            current_branch = client.get_current_branch()
            changes = client.get_staged_changes()
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        print_info(f"Current branch: {click.style(current_branch, fg='cyan', bold=True)}")
        if not changes:
            print_warning("No staged changes found. Stage files first with 'git add <file>'.")
            raise click.exceptions.Exit(EXIT_NO_CHANGES)

        paths = [change.path for change in changes]
        show_staged_files(paths)

        try:
            diff = client.get_staged_diff()
        except GitError as exc:
            print_error(f"Could not read staged diff: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)
        stats = compute_stats(diff)
        print_info(f"Total changes: {stats.describe()}", indent=1)

        # Step 2: Suggestions
        print_step(2, total_steps, "Generating Suggestions")
        config = load_llm_config()
        if config.command:
            print_info(f"LLM command: {config.command} ({config.model})", indent=1)
        suggester = ExternalSuggester(runner=runner)
        with ProgressIndicator("Generating branch names and commit messages"):
            result = suggester.generate(diff, paths, config)
        if result.warning:
            print_warning(f"LLM suggestions unavailable ({result.warning})")
        if result.source == SOURCE_EXTERNAL:
            print_success(f"Suggestions generated by {config.command}")
        else:
            print_info("Using built-in heuristic suggestions")

        # Step 3: Choices
        print_step(3, total_steps, "Choose Branch and Commit Message")
        flow = SelectionFlow(ClickChooser(), branch_exists=client.branch_exists)
        new_branch: Optional[str] = flow.choose_branch(current_branch, result.suggestions.branch_names)
        message = flow.choose_commit_message(result.suggestions.commit_messages)

        # Step 4: Apply
        print_step(4, total_steps, "Committing")
        if new_branch:
            try:
                with ProgressIndicator(f"Creating branch '{new_branch}'"):
                    client.create_branch(new_branch)
            except GitError as exc:
                print_error(f"Failed to create branch: {exc}")
                raise click.exceptions.Exit(EXIT_VCS_FAILURE)
            print_success(f"Created and switched to branch: {new_branch}")

        try:
            with ProgressIndicator("Creating commit"):
                client.commit(message)
        except GitError as exc:
            print_error(f"Commit failed: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        click.echo(f"\n{'='*60}")
        click.echo("✨ Summary")
        click.echo(f"{'='*60}\n")
        click.echo(f"  ✓ Branch: {new_branch or current_branch}")
        click.echo(f"  ✓ Message: {message.splitlines()[0]}")
        click.echo(f"  ✓ Files committed: {len(paths)}")
        click.echo("\n🎉 All done! Your changes have been committed successfully.\n")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except (click.exceptions.Exit, click.exceptions.Abort):
        # Click handles its own exit and abort exceptions
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
