"""Main CLI entry point."""

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from github.GithubException import GithubException
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import DEFAULT_DATA_PATH, FeedConfig
from ..feed.icons import IconResolver
from ..feed.models import Document
from ..feed.pipeline import FeedPipeline
from ..github_client.client import GitHubClient
from ..storage.manager import DocumentWriter
from ..utils.logging import setup_logging
from .options import (
    DATA_PATH_OPTION,
    DATA_VERSION_OPTION,
    EXCLUDE_LABELS_OPTION,
    HIDE_LABELS_OPTION,
    ICON_TIMEOUT_OPTION,
    INVALID_LABEL_OPTION,
    PROBE_ICONS_OPTION,
    REPOSITORY_OPTION,
    SORT_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="issue-feed",
    help="Publish structured GitHub issues as a JSON feed",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
logger = logging.getLogger(__name__)


def _records_table(document: Document, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Issue #", style="cyan")
    table.add_column("Labels", style="magenta")
    table.add_column("Icon", style="white")

    for record in document.content:
        table.add_row(
            str(record.issue_number),
            escape(", ".join(label.name for label in record.labels)),
            escape(record.icon),
        )
    return table


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def build(
    repository: str | None = REPOSITORY_OPTION,
    token: str | None = TOKEN_OPTION,
    data_version: str = DATA_VERSION_OPTION,
    data_path: str = DATA_PATH_OPTION,
    sort: str = SORT_OPTION,
    exclude_labels: str = EXCLUDE_LABELS_OPTION,
    hide_labels: str = HIDE_LABELS_OPTION,
    invalid_label: str | None = INVALID_LABEL_OPTION,
    probe_icons: bool = PROBE_ICONS_OPTION,
    icon_timeout: float = ICON_TIMEOUT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Build the feed document from the repository's open issues.

    Examples:
        issue-feed build --repository octo/awesome-list
        issue-feed build -r octo/awesome-list --sort version --hide-labels pinned
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    try:
        config = FeedConfig(
            repository=repository or "",
            github_token=token or "",
            data_version=data_version,
            data_path=data_path,
            sort=sort,
            exclude_labels=exclude_labels,
            hide_labels=hide_labels,
            invalid_label=invalid_label,
            probe_icons=probe_icons,
            icon_timeout=icon_timeout,
        )
    except ValidationError as e:
        console.print(f"❌ Invalid configuration:\n{e}", markup=False)
        raise typer.Exit(1)

    try:
        client = GitHubClient(token=config.github_token)
        with IconResolver(
            probe=config.probe_icons, timeout=config.icon_timeout
        ) as resolver:
            document = FeedPipeline(config, client, resolver).run()
    except (GithubException, ValueError) as e:
        logger.error("Error processing issues: %s", e)
        console.print(f"❌ Error: {e}", markup=False)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Error processing issues")
        console.print(f"❌ Unexpected error: {e}", markup=False)
        console.print("Please check your GitHub token and network connection.")
        raise typer.Exit(1)

    console.print(_records_table(document, escape(f"Feed {document.version}")))

    output_path = config.output_path()
    if not DocumentWriter().write(output_path, document):
        console.print(f"❌ Could not write {output_path}", markup=False)
        raise typer.Exit(1)

    logger.info("Successfully generated %s", output_path)
    console.print(
        f"✨ Wrote {len(document.content)} records to {output_path}", markup=False
    )


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def status(data_path: str = DATA_PATH_OPTION) -> None:
    """Show the records of a previously generated document."""
    path = Path(data_path.lstrip("/") or DEFAULT_DATA_PATH)
    document = DocumentWriter().load(path)
    if document is None:
        console.print(f"❌ No readable document at {path}", markup=False)
        raise typer.Exit(1)

    console.print(_records_table(document, escape(f"{path} ({document.version})")))
    console.print(f"📊 {len(document.content)} records")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from issue_feed import __version__

    console.print(f"Issue Feed v{__version__}")


if __name__ == "__main__":
    app()
