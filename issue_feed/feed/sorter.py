"""Sort strategies for feed entries.

The strategy is chosen by one string:

- ``created-asc``, ``created-desc``, ``updated-asc``, ``updated-desc``:
  issue timestamps
- ``posts-desc``: ``published`` date of the first post in the payload,
  falling back to the issue creation date
- anything else (``version``): semantic version label, highest first

Python's sort is stable, so entries that compare equal keep fetch order.
"""

import logging
import re
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from ..github_client.models import GitHubIssue
from ..utils.date_parser import ensure_aware, parse_date_input
from .models import FeedEntry

logger = logging.getLogger(__name__)

VERSION_LABEL_PATTERN = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")
DATE_FIELDS = {"created": "created_at", "updated": "updated_at"}
POSTS_STRATEGY = "posts-desc"


def version_key(issue: GitHubIssue) -> tuple[int, int, int]:
    """(major, minor, patch) of the first version-shaped label, else 0.0.0."""
    for label in issue.labels:
        match = VERSION_LABEL_PATTERN.match(label.name.strip())
        if match:
            major, minor, patch = (int(part) for part in match.groups())
            return major, minor, patch
    return 0, 0, 0


def first_post_published(payload: dict[str, Any]) -> datetime | None:
    """Publication date of the first entry of a payload's ``posts`` list."""
    posts = payload.get("posts")
    if not isinstance(posts, list) or not posts:
        return None
    first = posts[0]
    if not isinstance(first, dict):
        return None
    published = first.get("published")
    if not isinstance(published, str) or not published.strip():
        return None
    try:
        return parse_date_input(published)
    except ValueError:
        logger.warning("Unparseable post date %r, using issue creation date", published)
        return None


def posts_key(entry: FeedEntry) -> datetime:
    published = first_post_published(entry.record.payload)
    if published is None:
        return ensure_aware(entry.issue.created_at)
    return published


def parse_strategy(strategy: str) -> tuple[Callable[[FeedEntry], Any], bool]:
    """Map a strategy string to a sort key and a reverse flag."""
    strategy = strategy.strip().lower()
    if strategy == POSTS_STRATEGY:
        return posts_key, True

    field, _, direction = strategy.partition("-")
    if field in DATE_FIELDS:
        attr = DATE_FIELDS[field]

        def date_key(entry: FeedEntry) -> datetime:
            return ensure_aware(getattr(entry.issue, attr))

        return date_key, direction != "asc"

    return lambda entry: version_key(entry.issue), True


def sort_entries(entries: Sequence[FeedEntry], strategy: str) -> list[FeedEntry]:
    """Order feed entries by the given strategy."""
    key, reverse = parse_strategy(strategy)
    ordered = sorted(entries, key=key, reverse=reverse)
    logger.info(
        "Sorted by %s, issues: %s",
        strategy,
        ",".join(str(entry.record.issue_number) for entry in ordered),
    )
    return ordered
