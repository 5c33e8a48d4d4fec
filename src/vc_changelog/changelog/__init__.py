"""
Changelog rendering and updating.

See :mod:`vc_changelog.changelog.formatter` for the Markdown layout,
:mod:`vc_changelog.changelog.document` for merging a section into an
existing changelog and :mod:`vc_changelog.changelog.generator` for the
whole pipeline.
"""

from .document import ChangelogIOError, InsertResult, NoHeadingFound, update_changelog  # noqa: F401
from .formatter import Formatter  # noqa: F401
from .generator import generate_changelog  # noqa: F401
