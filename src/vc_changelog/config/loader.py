"""
Configuration loader for vc_changelog.

A project may ship a JSON configuration file named ``.changelog.json``
in its repository root. The file is optional; every key falls back to
a built-in default. It can look like this::

    {
        "changelog": "CHANGELOG.md",
        "exclude_grep": "^Squash",
        "missing_heading": "error",
        "rules": {
            "additions": ["^feat: .+$"],
            "bug_references": ["^Closes: #[0-9]+"]
        }
    }

Each list under ``rules`` replaces the corresponding built-in table of
:data:`vc_changelog.history.commit_classifier.DEFAULT_RULES`. If the
file is malformed or holds values of the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

from vc_changelog.changelog.document import MISSING_HEADING_APPEND, MISSING_HEADING_POLICIES
from vc_changelog.history.commit_classifier import DEFAULT_RULES, RuleSet
from vc_changelog.vcs.git_client import DEFAULT_EXCLUDE_GREP


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILENAME = ".changelog.json"
DEFAULT_CHANGELOG = "NEWS.md"
RULE_FAMILIES = ("additions", "fixes", "bumps", "bug_references")


class ConfigError(Exception):
    """Raised when the project configuration file is invalid."""

    pass


def default_config() -> Dict[str, Any]:
    """Return the configuration used when no file is present."""
    return {
        "changelog": DEFAULT_CHANGELOG,
        "exclude_grep": DEFAULT_EXCLUDE_GREP,
        "missing_heading": MISSING_HEADING_APPEND,
        "rules": {},
    }


def _validate_rules(rules: Any) -> None:
    if not isinstance(rules, dict):
        raise ConfigError("'rules' must be an object")
    unknown = [key for key in rules if key not in RULE_FAMILIES]
    if unknown:
        raise ConfigError(f"Unknown rule families: {', '.join(unknown)}")
    for family, patterns in rules.items():
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ConfigError(f"'rules.{family}' must be a list of strings")
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"Invalid pattern in 'rules.{family}': {pattern!r}: {exc}") from exc


def load_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load the project configuration from ``repo_root`` and return it.

    Args:
        repo_root: Repository root holding ``.changelog.json``. Defaults
                   to the current directory.

    Returns:
        A dictionary with the keys:
        - changelog (str): Changelog path relative to the repository
        - exclude_grep (str): Pattern of commit messages left out of the log
        - missing_heading (str): ``append`` or ``error``
        - rules (dict): Rule tables overriding the built-in ones

    Raises:
        ConfigError: If the configuration file is unreadable or invalid.
    """
    config_path = (repo_root or Path.cwd()) / CONFIG_FILENAME
    config = default_config()

    if not config_path.exists():
        logger.debug("No configuration file at %s; using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    unknown = [key for key in data if key not in config]
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    if "changelog" in data and not isinstance(data["changelog"], str):
        raise ConfigError("'changelog' must be a string")
    if "exclude_grep" in data and not isinstance(data["exclude_grep"], str):
        raise ConfigError("'exclude_grep' must be a string")
    if "missing_heading" in data and data["missing_heading"] not in MISSING_HEADING_POLICIES:
        raise ConfigError(
            f"'missing_heading' must be one of: {', '.join(MISSING_HEADING_POLICIES)}"
        )
    if "rules" in data:
        _validate_rules(data["rules"])

    config.update(data)
    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config


def rules_from_config(config: Dict[str, Any]) -> RuleSet:
    """Build the :class:`RuleSet` described by ``config``."""
    overrides = {family: tuple(patterns) for family, patterns in config.get("rules", {}).items()}
    return replace(DEFAULT_RULES, **overrides)
