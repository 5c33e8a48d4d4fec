"""
Insertion of a new release section into an existing changelog.

The changelog is a Markdown document where every release starts with a
heading such as ``## [1.3.0] - 2023-01-01``. A new section is placed
right above the first of these headings, so the newest release always
comes first and the rest of the document is left exactly as it was.

Updating in place writes the merged document to a temporary file next
to the changelog and renames it over the original. A failure at any
point leaves the original file untouched.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Pattern, Sequence


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


HEADING_PATTERN = re.compile(r"^##\s+\[[\w\-.]+\]\s+-\s+\d{4}-\d{2}-\d{2}$")

MISSING_HEADING_APPEND = "append"
MISSING_HEADING_ERROR = "error"
MISSING_HEADING_POLICIES = (MISSING_HEADING_APPEND, MISSING_HEADING_ERROR)


class ChangelogIOError(Exception):
    """Raised when the changelog cannot be read or written."""

    pass


class NoHeadingFound(Exception):
    """Raised when the changelog has no release heading to insert before."""

    pass


@dataclass
class InsertResult:
    """Outcome of merging a section into a changelog.

    Attributes
    ----------
    text : str
        The full merged document.
    inserted : bool
        True if the section was added to the document.
    duplicate : bool
        True if the release was already present and nothing was added.
    """

    text: str
    inserted: bool
    duplicate: bool = False


def _release_pattern(tag: str) -> Pattern[str]:
    return re.compile(r"^##\s+\[" + re.escape(tag) + r"\]\s+-\s+\d{4}-\d{2}-\d{2}$")


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")


def find_release(lines: Sequence[str], tag: str) -> Optional[int]:
    """Return the index of the heading line of release ``tag``, if any."""
    pattern = _release_pattern(tag)
    for index, line in enumerate(lines):
        if pattern.match(_strip_eol(line)):
            return index
    return None


def insert_section(
    lines: Sequence[str],
    section: str,
    tag: Optional[str] = None,
    missing_heading: str = MISSING_HEADING_APPEND,
) -> InsertResult:
    """Insert ``section`` before the first release heading of ``lines``.

    Parameters
    ----------
    lines : Sequence[str]
        Lines of the changelog, line endings included.
    section : str
        Rendered release section.
    tag : Optional[str]
        Tag of the new release. When given and the document already has a
        heading for it, the document is returned unchanged.
    missing_heading : str
        What to do when the document has no release heading at all:
        ``"append"`` adds the section at the end, ``"error"`` raises
        :class:`NoHeadingFound`.

    Returns
    -------
    InsertResult
        The merged document and what happened to it.
    """
    if missing_heading not in MISSING_HEADING_POLICIES:
        raise ValueError(f"Unknown missing heading policy: {missing_heading!r}")

    if tag is not None and find_release(lines, tag) is not None:
        logger.debug("Release %s is already in the changelog; leaving it unchanged", tag)
        return InsertResult(text="".join(lines), inserted=False, duplicate=True)

    output: List[str] = []
    inserted = False
    for line in lines:
        if not inserted and HEADING_PATTERN.match(_strip_eol(line)):
            output.append(section)
            inserted = True
        output.append(line)

    if not inserted:
        if missing_heading == MISSING_HEADING_ERROR:
            raise NoHeadingFound("No release heading found in changelog")
        logger.warning("No release heading found in changelog; appending section at the end")
        if output and not output[-1].endswith(("\n", "\r")):
            output.append("\n")
        output.append(section)
        inserted = True

    return InsertResult(text="".join(output), inserted=inserted)


def atomic_write_text(path: Path, text: str) -> None:
    """Replace the content of ``path`` with ``text`` atomically.

    Raises
    ------
    ChangelogIOError
        If the temporary file cannot be written or renamed. The original
        file is left as it was.
    """
    temp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            delete=False,
            dir=str(path.parent),
            prefix=path.name + ".",
            suffix=".tmp",
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(text)
        if path.exists():
            shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except OSError as exc:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise ChangelogIOError(f"Failed to update changelog {path}: {exc}") from exc
    logger.debug("Replaced %s", path)


def read_changelog(path: Path) -> List[str]:
    """Read the changelog at ``path``, keeping line endings as they are."""
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.readlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ChangelogIOError(f"Failed to read changelog {path}: {exc}") from exc


def update_changelog(
    path: Path,
    section: str,
    in_place: bool = False,
    tag: Optional[str] = None,
    missing_heading: str = MISSING_HEADING_APPEND,
) -> InsertResult:
    """Merge ``section`` into the changelog at ``path``.

    When ``in_place`` is False the file is not modified and the caller is
    expected to output :attr:`InsertResult.text`. A release that is
    already present leaves the file untouched either way.
    """
    lines = read_changelog(path)
    result = insert_section(lines, section, tag=tag, missing_heading=missing_heading)
    if in_place and result.inserted:
        atomic_write_text(path, result.text)
        logger.info("Updated %s", path)
    return result
