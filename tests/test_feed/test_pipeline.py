"""Tests for the feed pipeline."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock, Mock, patch

import httpx
import pytest
from github.GithubException import GithubException

from issue_feed.config import FeedConfig
from issue_feed.feed.icons import IconResolver
from issue_feed.feed.pipeline import FeedPipeline
from issue_feed.github_client.models import GitHubIssue

IssueFactory = Callable[..., GitHubIssue]

VALID_BODY = (
    "Add my site\n\n```json\n"
    '{"name": "Example", "icon": "https://example.com/icon.png"}\n'
    "```"
)


def make_config(**overrides: Any) -> FeedConfig:
    values: dict[str, Any] = {"repository": "octo/feed", "github_token": "test_token"}
    values.update(overrides)
    return FeedConfig(**values)


@pytest.fixture
def source() -> MagicMock:
    """Issue source returning no issues until told otherwise."""
    mock_source = MagicMock()
    mock_source.list_open_issues.return_value = []
    mock_source.update_issue_labels.return_value = True
    return mock_source


@pytest.fixture
def resolver() -> Mock:
    """Icon resolver that keeps every candidate it is given."""
    mock_resolver = Mock(spec=IconResolver)
    mock_resolver.resolve.side_effect = lambda candidate, user, number=None: (
        candidate or user.avatar_url
    )
    return mock_resolver


class TestFeedPipeline:
    """Test FeedPipeline class."""

    def test_end_to_end_skips_empty_body(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """Only issues with a payload become records."""
        source.list_open_issues.return_value = [
            make_issue(2, body=VALID_BODY),
            make_issue(1, body=""),
        ]

        document = FeedPipeline(make_config(), source, resolver).run()

        assert document.version == "v2"
        assert len(document.content) == 1
        assert document.content[0].issue_number == 2
        assert document.content[0].payload["name"] == "Example"
        source.list_open_issues.assert_called_once_with("octo", "feed")

    def test_excluded_issues_never_processed(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """Issues with excluded labels are dropped before extraction."""
        source.list_open_issues.return_value = [
            make_issue(1, body=VALID_BODY, labels=["审核中"]),
            make_issue(2, body=VALID_BODY, labels=["blog"]),
        ]

        document = FeedPipeline(make_config(), source, resolver).run()

        assert [r.issue_number for r in document.content] == [2]
        assert resolver.resolve.call_count == 1

    def test_hidden_labels_removed(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """Hidden labels are stripped from records but keep the issue."""
        source.list_open_issues.return_value = [
            make_issue(1, body=VALID_BODY, labels=["pinned", "blog"])
        ]

        config = make_config(hide_labels="pinned")
        document = FeedPipeline(config, source, resolver).run()

        assert [label.name for label in document.content[0].labels] == ["blog"]

    def test_hidden_labels_still_sort(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """Version labels can be hidden and still drive the order."""
        source.list_open_issues.return_value = [
            make_issue(1, body=VALID_BODY, labels=["1.2.0"]),
            make_issue(2, body=VALID_BODY, labels=["1.10.0"]),
        ]

        config = make_config(sort="version", hide_labels="1.2.0,1.10.0")
        document = FeedPipeline(config, source, resolver).run()

        assert [r.issue_number for r in document.content] == [2, 1]
        assert all(r.labels == [] for r in document.content)

    def test_sorted_by_config(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """Records follow the configured strategy."""
        source.list_open_issues.return_value = [
            make_issue(
                1, body=VALID_BODY, created_at=datetime(2023, 1, 1, tzinfo=timezone.utc)
            ),
            make_issue(
                2, body=VALID_BODY, created_at=datetime(2023, 6, 1, tzinfo=timezone.utc)
            ),
        ]

        document = FeedPipeline(make_config(sort="created-desc"), source, resolver).run()
        assert [r.issue_number for r in document.content] == [2, 1]

        document = FeedPipeline(make_config(sort="created-asc"), source, resolver).run()
        assert [r.issue_number for r in document.content] == [1, 2]

    def test_icon_resolved_from_payload(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """The payload's icon candidate goes through the resolver."""
        issue = make_issue(4, body='```json\n{"name": "x"}\n```')
        source.list_open_issues.return_value = [issue]

        document = FeedPipeline(make_config(), source, resolver).run()

        resolver.resolve.assert_called_once_with(None, issue.user, 4)
        assert document.content[0].icon == issue.user.avatar_url

    def test_failing_issue_isolated(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """An error in one issue does not stop the others."""
        source.list_open_issues.return_value = [
            make_issue(1, body=VALID_BODY),
            make_issue(2, body=VALID_BODY),
        ]
        resolver.resolve.side_effect = [
            RuntimeError("boom"),
            "https://example.com/icon.png",
        ]

        document = FeedPipeline(make_config(), source, resolver).run()

        assert [r.issue_number for r in document.content] == [2]

    def test_malformed_payload_skipped(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """Malformed JSON is skipped without error."""
        source.list_open_issues.return_value = [
            make_issue(1, body='```json\n{"name": }\n```')
        ]

        document = FeedPipeline(make_config(), source, resolver).run()

        assert document.content == []
        resolver.resolve.assert_not_called()

    def test_fetch_failure_propagates(
        self, source: MagicMock, resolver: Mock
    ) -> None:
        """Upstream errors end the run."""
        source.list_open_issues.side_effect = GithubException(500, "boom", None)

        with pytest.raises(GithubException):
            FeedPipeline(make_config(), source, resolver).run()

    def test_no_issues(self, source: MagicMock, resolver: Mock) -> None:
        """An empty repository gives an empty document."""
        document = FeedPipeline(make_config(data_version="v3"), source, resolver).run()
        assert document.model_dump() == {"version": "v3", "content": []}


class TestInvalidLabel:
    """Test tagging of issues without a usable payload."""

    def test_disabled_by_default(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """No label updates unless configured."""
        source.list_open_issues.return_value = [make_issue(1, body="no json")]

        FeedPipeline(make_config(), source, resolver).run()

        source.update_issue_labels.assert_not_called()

    def test_label_added(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """Configured label is appended to the existing ones."""
        source.list_open_issues.return_value = [
            make_issue(5, body="no json", labels=["blog"])
        ]

        FeedPipeline(make_config(invalid_label="格式错误"), source, resolver).run()

        source.update_issue_labels.assert_called_once_with(
            "octo", "feed", 5, ["blog", "格式错误"]
        )

    def test_already_labelled(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """Issues already carrying the label are left alone."""
        source.list_open_issues.return_value = [
            make_issue(5, body=None, labels=["格式错误"])
        ]

        FeedPipeline(make_config(invalid_label="格式错误"), source, resolver).run()

        source.update_issue_labels.assert_not_called()

    def test_update_failure_ignored(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """A failed label update does not affect the document."""
        source.list_open_issues.return_value = [
            make_issue(1, body="no json"),
            make_issue(2, body=VALID_BODY),
        ]
        source.update_issue_labels.return_value = False

        document = FeedPipeline(
            make_config(invalid_label="格式错误"), source, resolver
        ).run()

        assert [r.issue_number for r in document.content] == [2]


class TestPipelineWithRealResolver:
    """Pipeline wired to an IconResolver with probing disabled."""

    def test_fallback_icon(
        self, make_issue: IssueFactory, source: MagicMock
    ) -> None:
        """Broken candidates become the author's avatar."""
        issue = make_issue(1, body='```json\n{"icon": "favicon.png"}\n```')
        source.list_open_issues.return_value = [issue]

        with patch("issue_feed.feed.icons.httpx.Client"):
            with IconResolver(probe=False) as resolver:
                document = FeedPipeline(make_config(), source, resolver).run()

        assert document.content[0].icon == issue.user.avatar_url

    def test_icon_check_error_keeps_record(
        self, make_issue: IssueFactory, source: MagicMock
    ) -> None:
        """An icon that cannot even be encoded still yields a record."""
        issue = make_issue(
            1, body='```json\n{"name": "n", "icon": "https://a..b/x.png"}\n```'
        )
        source.list_open_issues.return_value = [issue]

        def handler(request: httpx.Request) -> httpx.Response:
            raise UnicodeError("encoding with 'idna' codec failed (label empty)")

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with IconResolver(client=client) as resolver:
            document = FeedPipeline(make_config(), source, resolver).run()

        assert [r.issue_number for r in document.content] == [1]
        assert document.content[0].icon == issue.user.avatar_url


class TestDuplicateIssues:
    """Test handling of issues listed more than once."""

    def test_duplicates_kept_once(
        self, make_issue: IssueFactory, source: MagicMock, resolver: Mock
    ) -> None:
        """A repeated issue appears once, at its first position."""
        i4 = make_issue(
            4, body=VALID_BODY, created_at=datetime(2024, 2, 1, tzinfo=timezone.utc)
        )
        i3 = make_issue(
            3, body=VALID_BODY, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)
        )
        source.list_open_issues.return_value = [i4, i3, i3]

        document = FeedPipeline(make_config(), source, resolver).run()

        assert [r.issue_number for r in document.content] == [4, 3]
        assert resolver.resolve.call_count == 2
