"""Orchestration of the issue-to-document pipeline."""

import logging
from typing import Protocol

from ..config import FeedConfig
from ..github_client.models import GitHubIssue
from .builder import build_record
from .extractor import extract_payload
from .filters import exclude_issues, hide_labels
from .icons import IconResolver
from .models import Document, FeedEntry, Record
from .sorter import sort_entries

logger = logging.getLogger(__name__)


class IssueSource(Protocol):
    """Where issues come from and where label changes go."""

    def list_open_issues(self, org: str, repo: str) -> list[GitHubIssue]: ...

    def update_issue_labels(
        self, org: str, repo: str, issue_number: int, labels: list[str]
    ) -> bool: ...


class FeedPipeline:
    """Fetch, filter, extract, resolve, sort.

    Issues are processed one at a time. A failure while processing one
    issue is logged and that issue is left out; a failure while fetching
    the issue list propagates.
    """

    def __init__(self, config: FeedConfig, source: IssueSource, resolver: IconResolver):
        self.config = config
        self.source = source
        self.resolver = resolver

    def run(self) -> Document:
        """Build the feed document from the repository's open issues."""
        issues = self.source.list_open_issues(self.config.org, self.config.repo)
        logger.info("Found %d open issues", len(issues))

        issues = self.drop_duplicates(issues)

        issues = exclude_issues(issues, self.config.exclude_labels)
        logger.info("Processing %d issues", len(issues))

        entries = []
        for issue in issues:
            try:
                record = self.process_issue(issue)
            except Exception:
                logger.exception("Error processing issue #%d", issue.number)
                continue
            if record is not None:
                entries.append(FeedEntry(issue=issue, record=record))

        ordered = sort_entries(entries, self.config.sort)
        document = Document(
            version=self.config.data_version,
            content=[entry.record for entry in ordered],
        )
        logger.info(
            "Built document %s with %d of %d issues",
            document.version,
            len(document.content),
            len(issues),
        )
        return document

    def drop_duplicates(self, issues: list[GitHubIssue]) -> list[GitHubIssue]:
        """Keep the first occurrence of each issue number.

        Paging can return an issue twice when new issues are opened mid-listing.
        """
        seen: set[int] = set()
        unique = []
        for issue in issues:
            if issue.number in seen:
                logger.warning("Issue #%d listed twice, keeping the first", issue.number)
                continue
            seen.add(issue.number)
            unique.append(issue)
        return unique

    def process_issue(self, issue: GitHubIssue) -> Record | None:
        """Turn one issue into a record, or None if it has no usable payload."""
        logger.info("Processing issue #%d", issue.number)
        if not issue.body:
            logger.warning("Issue #%d has no body content, skipping...", issue.number)
            self.mark_invalid(issue)
            return None

        payload = extract_payload(issue.body)
        if payload is None:
            logger.warning("No JSON content found in issue #%d", issue.number)
            self.mark_invalid(issue)
            return None

        labels = hide_labels(issue.labels, self.config.hide_labels)
        icon = self.resolver.resolve(payload.get("icon"), issue.user, issue.number)
        record = build_record(issue, payload, labels, icon)
        logger.debug(
            "#%d output record: %s", issue.number, record.model_dump_json()
        )
        return record

    def mark_invalid(self, issue: GitHubIssue) -> None:
        """Add the configured invalid-payload label to an issue, best effort."""
        label = self.config.invalid_label
        if label is None or label in issue.label_names:
            return
        self.source.update_issue_labels(
            self.config.org,
            self.config.repo,
            issue.number,
            [*issue.label_names, label],
        )
