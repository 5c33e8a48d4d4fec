"""
Commit history processing for changelogs.

This package turns raw ``git log`` text into :class:`Commit` records,
sorts them into changelog categories and reduces each one to a single
display line. See :mod:`vc_changelog.history.commit_parser`,
:mod:`vc_changelog.history.commit_classifier` and
:mod:`vc_changelog.history.shortener` for details.
"""

from .commit_classifier import (  # noqa: F401
    DEFAULT_RULES,
    ClassifiedCommits,
    CommitClassifier,
    CommitKind,
    RuleSet,
    classify_commits,
)
from .commit_model import Author, Commit  # noqa: F401
from .commit_parser import parse_commit, parse_log  # noqa: F401
from .shortener import CommitShortener  # noqa: F401
