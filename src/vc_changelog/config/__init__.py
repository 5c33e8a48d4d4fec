"""
Configuration loading for vc_changelog.

Provides a loader for the optional ``.changelog.json`` file located in
the repository root. See :mod:`vc_changelog.config.loader` for
implementation details.
"""

from .loader import ConfigError, load_config, rules_from_config  # noqa: F401
