"""
Rule-based classification of commits into changelog categories.

Every commit ends up as an addition, a fix or a change, based on the
first line of its message. Rules are plain regular expression strings
grouped in a :class:`RuleSet`, so the tables can be inspected, tested
and overridden from the project configuration without touching the
classification logic.

Families are evaluated in a fixed order: additions first, then fixes
on what is left, then version bumps. Bump commits are release noise
and are left out of the changelog entirely. Whatever remains is a
change.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Pattern, Sequence, Tuple

from vc_changelog.history.commit_model import Commit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class CommitKind(enum.Enum):
    """Rule families used during classification."""

    ADDITION = "additions"
    FIX = "fixes"
    BUMP = "bumps"


@dataclass(frozen=True)
class RuleSet:
    """Ordered pattern tables driving classification and shortening.

    Attributes
    ----------
    additions : Tuple[str, ...]
        Patterns matching the brief of a commit adding something.
    fixes : Tuple[str, ...]
        Patterns matching the brief of a bug fix.
    bumps : Tuple[str, ...]
        Patterns matching version bump commits, which are dropped.
    bug_references : Tuple[str, ...]
        Patterns matching message lines that reference a bug or issue.
    """

    additions: Tuple[str, ...]
    fixes: Tuple[str, ...]
    bumps: Tuple[str, ...]
    bug_references: Tuple[str, ...]


DEFAULT_RULES = RuleSet(
    additions=(
        r"^([Aa]dd(?:ed)?|[Nn]ew)\s+.+$",
        r"^.+:\s+([Aa]dd(?:ed)?|[Nn]ew)\s+.+$",
    ),
    fixes=(
        r"^[Ff]ix(?:ed)?\s+.+$",
        r"^.+\s+[Ff]ix(?:ed)?\s+.+$",
    ),
    bumps=(
        r"^[Kk]ick off\s+.+$",
        r"^(?:configure|meson|CMakeLists|version):\s+[Kk]ick off\s+.+$",
        r"^[Bb]ump(?:ed)?\s+version.+$",
        r"^(?:configure|meson|CMakeLists|version):\s+[Bb]ump(?:ed)?\s+version\s.+$",
        r"^(version|VERSION):\s+[Bb]ump(?:ed)?.+$",
    ),
    bug_references=(
        r"^Bug\s\d+:.*",
        r"^JIRA:\s\w+",
        r"^CS\d+",
    ),
)


def compile_patterns(patterns: Iterable[str]) -> List[Pattern[str]]:
    """Compile a sequence of pattern strings, keeping their order."""
    return [re.compile(pattern) for pattern in patterns]


@dataclass(frozen=True)
class ClassifiedCommits:
    """Result of classification.

    Each tuple references the :class:`Commit` objects of the classified
    list; a commit appears in at most one of them.
    """

    additions: Tuple[Commit, ...]
    changes: Tuple[Commit, ...]
    fixes: Tuple[Commit, ...]

    def __len__(self) -> int:
        return len(self.additions) + len(self.changes) + len(self.fixes)


class CommitClassifier:
    """Classify commits using the pattern tables of a :class:`RuleSet`."""

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self.rules = rules
        self._patterns: Dict[CommitKind, List[Pattern[str]]] = {
            kind: compile_patterns(getattr(rules, kind.value)) for kind in CommitKind
        }

    def check_kind(self, kind: CommitKind, brief: str) -> bool:
        """Return True if any pattern of the ``kind`` family matches ``brief``."""
        return any(pattern.search(brief) for pattern in self._patterns[kind])

    def _matches(self, kind: CommitKind, commit: Commit) -> bool:
        brief = commit.brief
        if brief is None:
            return False
        return self.check_kind(kind, brief)

    def classify(self, commits: Sequence[Commit]) -> ClassifiedCommits:
        """Split ``commits`` into additions, changes and fixes.

        The relative order of the input is kept inside each category.
        """
        additions: List[Commit] = []
        fixes: List[Commit] = []
        changes: List[Commit] = []
        for commit in commits:
            if self._matches(CommitKind.ADDITION, commit):
                additions.append(commit)
            elif self._matches(CommitKind.FIX, commit):
                fixes.append(commit)
            elif self._matches(CommitKind.BUMP, commit):
                logger.debug("Dropping version bump commit %s: %s", commit.id, commit.brief)
            else:
                changes.append(commit)
        logger.debug(
            "Classified %d commit(s): %d addition(s), %d fix(es), %d change(s)",
            len(commits),
            len(additions),
            len(fixes),
            len(changes),
        )
        return ClassifiedCommits(
            additions=tuple(additions),
            changes=tuple(changes),
            fixes=tuple(fixes),
        )


def classify_commits(commits: Sequence[Commit], rules: RuleSet = DEFAULT_RULES) -> ClassifiedCommits:
    """Classify ``commits`` with a classifier built from ``rules``."""
    return CommitClassifier(rules).classify(commits)
