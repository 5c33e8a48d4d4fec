"""
Command line interface for the vc_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``mkchangelog`` command. It locates the
repository, loads the project configuration, generates the section of
the new release from the Git history and merges it into the changelog.

The merged changelog is written to standard output unless ``--in-place``
is given; status messages always go to standard error so that the
output can be redirected safely.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from vc_changelog import __version__
from vc_changelog.changelog.document import ChangelogIOError, NoHeadingFound, update_changelog
from vc_changelog.changelog.generator import generate_changelog
from vc_changelog.config.loader import ConfigError, load_config, rules_from_config
from vc_changelog.vcs.git_client import GitLogSource, SourceUnavailable

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 4
EXIT_VCS_FAILURE = 5
EXIT_CHANGELOG_ERROR = 6


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=True)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=True)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


@click.command()
@click.option("-s", "--since", "old_tag", metavar="TAG", help="Previous tag. Defaults to the latest tag.")
@click.option(
    "-f",
    "--file",
    "changelog",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to changelog, relative to the repository. Defaults to NEWS.md.",
)
@click.option("-i", "--in-place", "in_place", is_flag=True, help="Edit changelog in place.")
@click.option(
    "--date",
    "release_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Release date to use instead of today.",
)
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="mkchangelog")
@click.argument("new_tag")
@click.argument(
    "repository",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
def main(
    old_tag: Optional[str],
    changelog: Optional[Path],
    in_place: bool,
    release_date: Optional[datetime],
    verbose: bool,
    new_tag: str,
    repository: Optional[Path],
) -> None:
    """Generate the changelog section of release NEW_TAG.

    The commits made since the previous tag in REPOSITORY (the current
    directory by default) are sorted into added, changed and fixed
    entries and inserted above the latest release of the changelog.
    """
    # Configure logging. Use force=True to ensure handlers are reconfigured
    # on subsequent invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    try:
        start = repository or Path.cwd()
        repo_root = GitLogSource.find_repo_root(start)
        if repo_root is None:
            print_error(f"No Git repository found at {start} or its parent directories.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", repo_root)

        try:
            config = load_config(repo_root)
            rules = rules_from_config(config)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        source = GitLogSource(repo_root)
        try:
            if old_tag is None:
                old_tag = source.latest_tag()
                print_info(f"Using latest tag: {old_tag}")
            section = generate_changelog(
                source,
                old_tag,
                new_tag,
                rules=rules,
                exclude_grep=config["exclude_grep"],
                release_date=release_date.date() if release_date else None,
            )
        except SourceUnavailable as exc:
            print_error(f"VCS error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        changelog_path = repo_root / (changelog or Path(config["changelog"]))
        try:
            result = update_changelog(
                changelog_path,
                section,
                in_place=in_place,
                tag=new_tag,
                missing_heading=config["missing_heading"],
            )
        except NoHeadingFound as exc:
            print_error(f"{exc}: {changelog_path}")
            raise click.exceptions.Exit(EXIT_CHANGELOG_ERROR)
        except ChangelogIOError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_CHANGELOG_ERROR)

        if result.duplicate:
            print_warning(f"Release {new_tag} is already in {changelog_path}; nothing added")
        if not in_place:
            click.echo(result.text, nl=False)
        elif result.inserted:
            print_success(f"Added release {new_tag} to {changelog_path}")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
