"""Label based filtering of issues and of the labels they publish."""

import logging
from collections.abc import Iterable, Sequence

from ..github_client.models import GitHubIssue, GitHubLabel

logger = logging.getLogger(__name__)


def parse_label_list(value: str | Iterable[str] | None) -> list[str]:
    """Split a comma separated label list, trimming names and dropping blanks.

    Lists are accepted as well and normalized the same way.
    """
    if value is None:
        return []
    parts = value.split(",") if isinstance(value, str) else list(value)
    return [part.strip() for part in parts if part and part.strip()]


def exclude_issues(
    issues: Sequence[GitHubIssue], excluded: Sequence[str]
) -> list[GitHubIssue]:
    """Drop every issue that carries at least one excluded label.

    Label names are matched exactly. The remaining issues keep their order.
    """
    if not excluded:
        return list(issues)

    excluded_set = set(excluded)
    kept = [
        issue
        for issue in issues
        if not excluded_set.intersection(issue.label_names)
    ]
    logger.info(
        "After filtering by [%s], %d of %d issues remain: %s",
        ", ".join(excluded),
        len(kept),
        len(issues),
        ",".join(str(issue.number) for issue in kept),
    )
    return kept


def hide_labels(
    labels: Sequence[GitHubLabel], hidden: Sequence[str]
) -> list[GitHubLabel]:
    """Remove hidden labels from a label set without affecting the issue."""
    if not hidden:
        return list(labels)
    hidden_set = set(hidden)
    return [label for label in labels if label.name not in hidden_set]
