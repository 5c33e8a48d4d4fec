"""
Parser for the default ``git log`` output format.

Each commit in the log looks like::

    commit 3f2a9c1...
    Author: Jane Doe <jane@example.org>
    Date:   Tue, 3 Jan 2023 10:15:00 +0100

        Add support for tags

        Bug 42: tags were ignored

Blocks whose header cannot be parsed are skipped so that a single odd
entry never prevents the rest of the changelog from being generated.
"""

from __future__ import annotations

import logging
import re
from datetime import timezone
from email.utils import parsedate_to_datetime
from typing import Iterator, Optional

from vc_changelog.history.commit_model import Author, Commit, split_lines


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


COMMIT_MARKER = re.compile(r"^commit ", re.MULTILINE)
AUTHOR_PATTERN = re.compile(r"^Author:\s+(.+)<(.+)>$")
DATE_PATTERN = re.compile(r"^Date:\s+(.+)$")
# Day, date, time with optional seconds and a numeric or obsolete named zone
RFC2822_DATE = re.compile(
    r"^(?:[A-Za-z]{3},\s*)?\d{1,2}\s+[A-Za-z]{3}\s+\d{2,4}\s+"
    r"\d{1,2}:\d{2}(?::\d{2})?\s+(?:[+-]\d{4}|UT|GMT|[ECMP][SD]T|Z)$"
)


def parse_commit(block: str) -> Optional[Commit]:
    """Parse one commit block (the text following the ``commit`` marker).

    Returns
    -------
    Optional[Commit]
        The parsed commit, or ``None`` if the id, author or date line is
        missing or malformed.
    """
    lines = split_lines(block)
    if len(lines) < 3:
        return None

    id_fields = lines[0].split()
    if not id_fields:
        return None

    author_match = AUTHOR_PATTERN.match(lines[1])
    if author_match is None:
        return None
    date_match = DATE_PATTERN.match(lines[2])
    if date_match is None:
        return None

    date_text = date_match.group(1).strip()
    if RFC2822_DATE.match(date_text) is None:
        return None
    try:
        date = parsedate_to_datetime(date_text)
    except (TypeError, ValueError):
        return None
    if date.tzinfo is None:
        # RFC 2822 "-0000" means UTC with no information about the local zone
        date = date.replace(tzinfo=timezone.utc)

    # lines[3] is the blank separator between the header and the body
    body = [line.lstrip() for line in lines[4:]]
    return Commit(
        id=id_fields[0],
        author=Author(
            name=author_match.group(1).strip(),
            email=author_match.group(2).strip(),
        ),
        date=date,
        message="\n".join(body).rstrip("\n"),
    )


def parse_log(text: str) -> Iterator[Commit]:
    """Yield the commits found in raw ``git log`` text, in log order."""
    # Anything before the first marker is not part of a commit
    blocks = COMMIT_MARKER.split(text)[1:]
    for index, block in enumerate(blocks):
        commit = parse_commit(block)
        if commit is None:
            logger.debug("Skipping malformed commit block #%d: %r", index, block[:80])
            continue
        yield commit
