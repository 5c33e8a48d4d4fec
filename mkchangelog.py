#!/usr/bin/env python
"""
Thin wrapper script to invoke the vc_changelog CLI.

Running ``python mkchangelog.py`` is equivalent to running the
``mkchangelog`` console script installed via ``pyproject.toml``.
"""

from vc_changelog.cli import main


if __name__ == "__main__":
    main(prog_name="mkchangelog")
