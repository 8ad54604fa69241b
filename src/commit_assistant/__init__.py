"""
Top-level package for commit_assistant.

This package exposes the main CLI entry point via the
``commit_assistant.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
