"""
Version control system (VCS) integration.

This package contains the Git log source used to read the commit
history and tags of a repository.
"""

from .git_client import GitLogSource, SourceUnavailable  # noqa: F401
