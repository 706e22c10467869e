"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from issue_feed.github_client.models import GitHubIssue, GitHubLabel, GitHubUser

IssueFactory = Callable[..., GitHubIssue]


@pytest.fixture
def sample_user() -> GitHubUser:
    """Issue author without a gravatar id."""
    return GitHubUser(
        login="octocat",
        id=583231,
        avatar_url="https://avatars.githubusercontent.com/u/583231?v=4",
    )


@pytest.fixture
def make_issue(sample_user: GitHubUser) -> IssueFactory:
    """Factory for GitHub issues with sensible defaults."""

    def _make(
        number: int = 1,
        body: str | None = '```json\n{"name": "Example"}\n```',
        labels: list[str | tuple[str, str]] | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        user: GitHubUser | None = None,
        **kwargs: Any,
    ) -> GitHubIssue:
        label_models = []
        for label in labels or []:
            if isinstance(label, tuple):
                label_models.append(GitHubLabel(name=label[0], color=label[1]))
            else:
                label_models.append(GitHubLabel(name=label, color="ededed"))
        created = created_at or datetime(2024, 1, 1, tzinfo=timezone.utc)
        return GitHubIssue(
            number=number,
            title=kwargs.pop("title", f"Issue {number}"),
            body=body,
            labels=label_models,
            user=user or sample_user,
            created_at=created,
            updated_at=updated_at or created,
            **kwargs,
        )

    return _make
