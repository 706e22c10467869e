"""Pydantic models for the published feed document."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..github_client.models import GitHubIssue


class DecoratedLabel(BaseModel):
    """Issue label with its color expressed as HSL."""

    model_config = ConfigDict(frozen=True)

    name: str
    color: str | None = None
    h: int = Field(0, ge=0, lt=360, description="Hue in degrees")
    s: int = Field(0, ge=0, le=100, description="Saturation in percent")
    l: int = Field(0, ge=0, le=100, description="Lightness in percent")  # noqa: E741


class Record(BaseModel):
    """One published entry: the issue's JSON payload plus derived fields.

    Keys supplied by the issue author are kept as extra fields.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    issue_number: int
    labels: list[DecoratedLabel] = Field(default_factory=list)
    icon: str = Field(..., min_length=1)

    @property
    def payload(self) -> dict[str, Any]:
        """Author supplied keys of the record."""
        return dict(self.model_extra or {})


class Document(BaseModel):
    """The feed file: a format version and the ordered records."""

    model_config = ConfigDict(frozen=True)

    version: str
    content: list[Record] = Field(default_factory=list)


class FeedEntry(BaseModel):
    """A record paired with the issue it was built from, used for sorting."""

    model_config = ConfigDict(frozen=True)

    issue: GitHubIssue
    record: Record
