from pathlib import Path

import pytest


SAMPLE_LOG = """\
commit 1111111111111111111111111111111111111111
Author: Jane Doe <jane@example.org>
Date:   Tue, 3 Jan 2023 10:15:00 +0100

    Added support for tags

    Bug 42: tags were ignored

commit 2222222222222222222222222222222222222222
Author: John Smith <john@example.org>
Date:   Wed, 4 Jan 2023 08:00:00 +0000

    Fixed a crash

commit 3333333333333333333333333333333333333333
Author: Release Bot <bot@example.org>
Date:   Thu, 5 Jan 2023 09:00:00 -0500

    Bump version to 1.2.3

commit 4444444444444444444444444444444444444444
Author: Jane Doe <jane@example.org>
Date:   Fri, 6 Jan 2023 12:00:00 +0100

    Refactor internals"""


SAMPLE_CHANGELOG = """\
# Changelog

All notable changes to this project are documented here.

## [1.3.0] - 2023-01-01

### Added

- Something new

## [1.2.0] - 2022-06-01

### Fixed

- Something broken
"""


@pytest.fixture
def sample_log() -> str:
    """Raw ``git log`` output with an addition, a fix, a bump and a change."""
    return SAMPLE_LOG


@pytest.fixture
def sample_changelog() -> str:
    return SAMPLE_CHANGELOG


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """An empty directory that looks like the root of a Git repository."""
    root = tmp_path / "project"
    root.mkdir()
    (root / ".git").mkdir()
    return root
