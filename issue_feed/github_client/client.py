"""GitHub API client using PyGitHub."""

import logging
import os

from github import Github
from github.GithubException import GithubException, UnknownObjectException
from github.Issue import Issue
from github.Label import Label
from github.NamedUser import NamedUser
from github.Repository import Repository

from .models import GitHubIssue, GitHubLabel, GitHubUser

logger = logging.getLogger(__name__)


class GitHubClient:
    """GitHub API client for listing issues and setting their labels."""

    def __init__(self, token: str | None = None):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.github = Github(self.token)

    def _convert_user(self, github_user: NamedUser) -> GitHubUser:
        """Convert PyGitHub user to our model."""
        return GitHubUser(
            login=github_user.login,
            id=github_user.id,
            avatar_url=github_user.avatar_url,
            gravatar_id=github_user.gravatar_id or None,
        )

    def _convert_label(self, github_label: Label) -> GitHubLabel:
        """Convert PyGitHub label to our model."""
        return GitHubLabel(
            name=github_label.name,
            color=github_label.color,
            description=github_label.description,
        )

    def _convert_issue(self, github_issue: Issue) -> GitHubIssue:
        """Convert PyGitHub issue to our model."""
        return GitHubIssue(
            number=github_issue.number,
            title=github_issue.title,
            body=github_issue.body,
            state=github_issue.state,
            labels=[self._convert_label(label) for label in github_issue.labels],
            user=self._convert_user(github_issue.user),
            created_at=github_issue.created_at,
            updated_at=github_issue.updated_at,
        )

    def get_repository(self, org: str, repo: str) -> Repository:
        """Get repository object."""
        try:
            return self.github.get_repo(f"{org}/{repo}")
        except UnknownObjectException:
            raise ValueError(f"Repository {org}/{repo} not found")

    def list_open_issues(self, org: str, repo: str) -> list[GitHubIssue]:
        """List every open issue of a repository, newest created first.

        PyGitHub pages through the results transparently. Pull requests,
        which the issues endpoint also returns, are skipped.

        Raises:
            ValueError: If the repository does not exist
            GithubException: For other API errors
        """
        repository = self.get_repository(org, repo)
        issues = []
        for github_issue in repository.get_issues(
            state="open", sort="created", direction="desc"
        ):
            if github_issue.pull_request is not None:
                continue
            issues.append(self._convert_issue(github_issue))

        logger.info(
            "Found %d open issues in %s/%s: %s",
            len(issues),
            org,
            repo,
            ",".join(str(issue.number) for issue in issues),
        )
        return issues

    def update_issue_labels(
        self, org: str, repo: str, issue_number: int, labels: list[str]
    ) -> bool:
        """Replace the labels of an issue.

        Failures are logged, never raised.

        Args:
            org: Organization name
            repo: Repository name
            issue_number: Issue number
            labels: List of label names to set on the issue

        Returns:
            True if successful, False otherwise
        """
        try:
            repository = self.get_repository(org, repo)
            github_issue = repository.get_issue(issue_number)

            # Set new labels (this replaces all existing labels)
            github_issue.set_labels(*labels)

            logger.info("Updated labels for issue #%d: %s", issue_number, labels)
            return True

        except UnknownObjectException:
            logger.warning("Issue #%d not found in %s/%s", issue_number, org, repo)
        except (GithubException, ValueError) as e:
            logger.warning("Error updating labels for issue #%d: %s", issue_number, e)
        return False
