#!/usr/bin/env python
"""
Thin wrapper script to invoke the commit_assistant CLI.

Running ``python autocommit.py`` is equivalent to running the
``git-auto-commit`` console script installed via ``pyproject.toml``.
"""

from commit_assistant.cli import main


if __name__ == "__main__":
    main(prog_name="git-auto-commit")
