"""
Data models for parsed commits.

A :class:`Commit` is built once by the log parser and never modified
afterwards. Later stages hold references to these objects rather than
copies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> List[str]:
    """Split ``text`` on line feeds only, dropping a preceding carriage return.

    Unlike :meth:`str.splitlines`, form feeds and Unicode line separators
    are kept as part of the line.
    """
    return LINE_BREAK.split(text)


@dataclass(frozen=True)
class Author:
    """Author of a commit."""

    name: str
    email: str


@dataclass(frozen=True)
class Commit:
    """Representation of a single commit taken from ``git log``.

    Attributes
    ----------
    id : str
        Commit hash.
    author : Author
        Name and email of the author.
    date : datetime
        Author date, timezone aware.
    message : str
        Full commit message with the indentation of every line removed.
    """

    id: str
    author: Author
    date: datetime
    message: str

    @property
    def brief(self) -> Optional[str]:
        """Return the first line of the message, or ``None`` if it is empty."""
        if not self.message:
            return None
        return split_lines(self.message)[0]
