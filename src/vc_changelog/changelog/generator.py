"""
Changelog section generation.

Ties the pipeline together: the log source provides the raw history,
which is parsed, classified and rendered as a Markdown section.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from vc_changelog.changelog.formatter import Formatter
from vc_changelog.history.commit_classifier import DEFAULT_RULES, CommitClassifier, RuleSet
from vc_changelog.history.commit_parser import parse_log
from vc_changelog.history.shortener import CommitShortener
from vc_changelog.vcs.git_client import DEFAULT_EXCLUDE_GREP, GitLogSource


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def generate_changelog(
    source: GitLogSource,
    old_tag: str,
    new_tag: str,
    rules: RuleSet = DEFAULT_RULES,
    exclude_grep: str = DEFAULT_EXCLUDE_GREP,
    release_date: Optional[date] = None,
) -> str:
    """Generate the changelog section of ``new_tag``.

    Parameters
    ----------
    source : GitLogSource
        Where the commit history comes from.
    old_tag : str
        Previous release; only commits after it are listed.
    new_tag : str
        Name of the release being described.
    rules : RuleSet
        Classification and bug reference patterns.
    exclude_grep : str
        Commits whose message matches this pattern are not listed.
    release_date : Optional[date]
        Date shown in the heading, today by default.

    Returns
    -------
    str
        The rendered Markdown section.

    Raises
    ------
    SourceUnavailable
        If the history cannot be read.
    """
    text = source.fetch_log(old_tag, exclude_grep=exclude_grep)
    commits = list(parse_log(text))
    logger.info("Found %d commit(s) since %s", len(commits), old_tag)
    classified = CommitClassifier(rules).classify(commits)
    formatter = Formatter(CommitShortener(rules))
    return formatter.format(classified, new_tag, release_date=release_date)
