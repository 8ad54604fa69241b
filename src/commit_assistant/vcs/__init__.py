"""
Version control and process integrations.

This package contains the :class:`CommandRunner` capability used to start
external programs and the :class:`GitClient` built on top of it, which
reads the staged state of a repository and performs the branch switch
and commit.
"""

from .git_client import GitClient, GitError  # noqa: F401
from .runner import CommandResult, SubprocessRunner  # noqa: F401
