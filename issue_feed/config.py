"""Run configuration for the feed builder."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .feed.filters import parse_label_list

DEFAULT_DATA_VERSION = "v2"
DEFAULT_DATA_PATH = "v2/data.json"
DEFAULT_SORT = "created-desc"
DEFAULT_EXCLUDE_LABELS = "审核中, 无法访问"


class FeedConfig(BaseModel):
    """Immutable settings, built once at startup and passed to each component."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    repository: str = Field(..., description="Repository as 'owner/name'")
    github_token: str = Field(..., min_length=1, repr=False)
    data_version: str = Field(DEFAULT_DATA_VERSION, min_length=1)
    data_path: str = Field(
        DEFAULT_DATA_PATH, description="Output file, relative to the working directory"
    )
    sort: str = Field(DEFAULT_SORT, description="Sort strategy")
    exclude_labels: list[str] = Field(
        default_factory=lambda: parse_label_list(DEFAULT_EXCLUDE_LABELS),
        description="Issues with any of these labels are skipped",
    )
    hide_labels: list[str] = Field(
        default_factory=list,
        description="Labels removed from published records",
    )
    probe_icons: bool = Field(True, description="Check icon URLs with a HEAD request")
    icon_timeout: float = Field(5.0, gt=0, description="Icon probe timeout (seconds)")
    invalid_label: str | None = Field(
        None, description="Label added to issues without a usable JSON payload"
    )

    @field_validator("exclude_labels", "hide_labels", mode="before")
    @classmethod
    def split_labels(cls, v: object) -> list[str]:
        if v is None or isinstance(v, str | list | tuple):
            return parse_label_list(v)
        raise ValueError("Expected a comma separated string or a list of labels")

    @field_validator("repository")
    @classmethod
    def check_repository(cls, v: str) -> str:
        owner, sep, name = v.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Repository must look like 'owner/name', got '{v}'")
        return f"{owner}/{name}"

    @field_validator("invalid_label")
    @classmethod
    def blank_label_is_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def org(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/", 1)[1]

    def output_path(self, base: Path | None = None) -> Path:
        """Absolute output file path, resolved against ``base`` or the CWD."""
        path = Path(self.data_path.lstrip("/"))
        return (base or Path.cwd()) / path
