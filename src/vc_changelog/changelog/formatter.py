"""
Markdown rendering of classified commits.

The rendered section follows the "Keep a Changelog" layout::

    ## [1.4.0] - 2024-05-02

    ### Added

    - Add support for tags

    ### Fixed

    - Fix crash on empty input (Bug 12: crash)

"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from vc_changelog.history.commit_classifier import ClassifiedCommits
from vc_changelog.history.commit_model import Commit
from vc_changelog.history.shortener import CommitShortener


def format_md_section(level: int, title: str, items: Sequence[str]) -> str:
    """Render a Markdown heading followed by a bullet list.

    An empty ``items`` sequence renders nothing at all.
    """
    if not items:
        return ""
    lines = [f"{'#' * level} {title}", ""]
    lines.extend(f"- {item}" for item in items)
    return "\n".join(lines) + "\n\n"


def format_release_heading(tag: str, release_date: date) -> str:
    """Return the ``## [tag] - YYYY-MM-DD`` heading line, without newline."""
    return f"## [{tag}] - {release_date.strftime('%Y-%m-%d')}"


class Formatter:
    """Format classified commits as a changelog section."""

    def __init__(self, shortener: Optional[CommitShortener] = None) -> None:
        self.shortener = shortener or CommitShortener()

    def shorten(self, commits: Sequence[Commit]) -> List[str]:
        """Shorten ``commits`` and return the lines sorted alphabetically."""
        lines = [self.shortener.shorten(commit) for commit in commits]
        return sorted(line for line in lines if line is not None)

    def format(
        self,
        commits: ClassifiedCommits,
        tag: str,
        release_date: Optional[date] = None,
    ) -> str:
        """Render the changelog section for release ``tag``.

        Parameters
        ----------
        commits : ClassifiedCommits
            Output of the classifier.
        tag : str
            Name of the new release.
        release_date : Optional[date]
            Date written in the heading. Defaults to the current UTC date.

        Returns
        -------
        str
            Markdown text ending with a blank line.
        """
        if release_date is None:
            release_date = datetime.now(timezone.utc).date()
        text = format_release_heading(tag, release_date) + "\n\n"
        text += format_md_section(3, "Added", self.shorten(commits.additions))
        text += format_md_section(3, "Changed", self.shorten(commits.changes))
        text += format_md_section(3, "Fixed", self.shorten(commits.fixes))
        return text
