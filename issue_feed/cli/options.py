"""Standardized CLI option definitions.

Every option falls back to the environment variable GitHub Actions sets
for the matching action input, so the command runs unchanged in a workflow.
"""

import typer

from ..config import (
    DEFAULT_DATA_PATH,
    DEFAULT_DATA_VERSION,
    DEFAULT_EXCLUDE_LABELS,
    DEFAULT_SORT,
)

REPOSITORY_OPTION = typer.Option(
    None,
    "--repository",
    "-r",
    envvar="GITHUB_REPOSITORY",
    help="Repository as owner/name (defaults to GITHUB_REPOSITORY)",
)

TOKEN_OPTION = typer.Option(
    None,
    "--token",
    envvar=["INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"],
    help="GitHub API token (defaults to GITHUB_TOKEN env var)",
    show_default=False,
)

DATA_VERSION_OPTION = typer.Option(
    DEFAULT_DATA_VERSION,
    "--data-version",
    envvar="INPUT_DATA_VERSION",
    help="Version tag written to the document",
)

DATA_PATH_OPTION = typer.Option(
    DEFAULT_DATA_PATH,
    "--data-path",
    "-p",
    envvar="INPUT_DATA_PATH",
    help="Output file, relative to the working directory",
)

SORT_OPTION = typer.Option(
    DEFAULT_SORT,
    "--sort",
    "-s",
    envvar="INPUT_SORT",
    help="created-asc|created-desc|updated-asc|updated-desc|posts-desc|version",
)

EXCLUDE_LABELS_OPTION = typer.Option(
    DEFAULT_EXCLUDE_LABELS,
    "--exclude-labels",
    "-x",
    envvar="INPUT_EXCLUDE_LABELS",
    help="Comma separated labels; issues carrying any of them are skipped",
)

HIDE_LABELS_OPTION = typer.Option(
    "",
    "--hide-labels",
    envvar="INPUT_HIDE_LABELS",
    help="Comma separated labels left out of published records",
)

INVALID_LABEL_OPTION = typer.Option(
    None,
    "--invalid-label",
    envvar="INPUT_INVALID_LABEL",
    help="Label to add to issues without a usable JSON payload",
)

PROBE_ICONS_OPTION = typer.Option(
    True,
    "--probe-icons/--no-probe-icons",
    envvar="INPUT_PROBE_ICONS",
    help="Check icon URLs with a HEAD request",
)

ICON_TIMEOUT_OPTION = typer.Option(
    5.0, "--icon-timeout", help="Icon probe timeout in seconds"
)

VERBOSE_OPTION = typer.Option(
    False, "--verbose", "-v", help="Log debug output, including every record"
)
