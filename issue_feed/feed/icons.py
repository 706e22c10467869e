"""Icon URL validation with avatar fallback."""

import logging
from types import TracebackType

import httpx

from ..github_client.models import GitHubUser

logger = logging.getLogger(__name__)

GRAVATAR_URL = "https://gravatar.com/avatar/{gravatar_id}?s=256&d=identicon"
DEFAULT_PROBE_TIMEOUT = 5.0


def is_valid_url(url: str) -> bool:
    """Check that a string is an absolute http(s) URL with a host."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError):
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def fallback_icon(user: GitHubUser) -> str:
    """Avatar for an issue author: Gravatar identicon if possible, else GitHub's."""
    if user.gravatar_id:
        return GRAVATAR_URL.format(gravatar_id=user.gravatar_id)
    return user.avatar_url


class IconResolver:
    """Decides which icon URL a record gets.

    A candidate from the payload is kept when it is a well formed URL and,
    with probing enabled, answers a HEAD request with a 2xx status inside
    the timeout. Anything else falls back to the author's avatar.
    """

    def __init__(
        self,
        probe: bool = True,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        """Initialize the resolver.

        Args:
            probe: Whether to check reachability of candidate URLs
            timeout: Probe timeout in seconds
            client: HTTP client to use; one is created and owned if omitted
        """
        self.probe = probe
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.Client(
            headers={"User-Agent": "issue-feed/0.1.0"}
        )

    def __enter__(self) -> "IconResolver":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def is_reachable(self, url: str) -> bool:
        """Send a HEAD request and report whether it ended in a 2xx status."""
        try:
            response = self.client.head(
                url, timeout=self.timeout, follow_redirects=True
            )
        except Exception as e:
            logger.warning("Icon URL %s is not accessible: %s", url, e)
            return False

        logger.info(
            "Icon URL %s, response status: %d, ok: %s",
            url,
            response.status_code,
            response.is_success,
        )
        return response.is_success

    def is_valid_icon(self, candidate: str | None) -> bool:
        if not candidate or not isinstance(candidate, str):
            return False
        if not is_valid_url(candidate):
            logger.warning("Icon URL %s is not a valid URL", candidate)
            return False
        if not self.probe:
            return True
        return self.is_reachable(candidate)

    def resolve(
        self, candidate: str | None, user: GitHubUser, issue_number: int | None = None
    ) -> str:
        """Return the candidate icon if usable, otherwise the author's avatar.

        Args:
            candidate: Icon URL from the issue payload, possibly missing
            user: Author of the issue
            issue_number: Only used to label log lines

        Returns:
            A non-empty URL string
        """
        prefix = f"#{issue_number} " if issue_number is not None else ""
        valid = self.is_valid_icon(candidate)
        logger.info("%sIcon URL %s is valid: %s", prefix, candidate, valid)
        if valid:
            assert candidate is not None
            return candidate

        icon = fallback_icon(user)
        source = "gravatar" if user.gravatar_id else "avatar"
        logger.info("%sUsing %s of %s as icon: %s", prefix, source, user.login, icon)
        return icon
