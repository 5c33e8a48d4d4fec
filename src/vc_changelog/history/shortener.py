"""Reduce a commit to the single line shown in the changelog."""

from __future__ import annotations

from typing import Optional

from vc_changelog.history.commit_classifier import DEFAULT_RULES, RuleSet, compile_patterns
from vc_changelog.history.commit_model import Commit, split_lines


class CommitShortener:
    """Build changelog lines from commit briefs and bug references."""

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self._bug_patterns = compile_patterns(rules.bug_references)

    def shorten(self, commit: Commit) -> Optional[str]:
        """Return the brief of ``commit`` with its bug references appended.

        Every message line matching a bug reference pattern is collected
        in message order and appended as ``" (ref1,ref2)"``. Commits
        with an empty message yield ``None``.
        """
        brief = commit.brief
        if brief is None:
            return None
        bugs = [
            line
            for line in split_lines(commit.message)
            if any(pattern.search(line) for pattern in self._bug_patterns)
        ]
        if bugs:
            return f"{brief} ({','.join(bugs)})"
        return brief
