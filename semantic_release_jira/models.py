"""Data models for the semantic-release-jira plugin."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TICKET_PATTERN = r"[A-Z]+-\d+"


class JiraConfig(BaseModel):
    """Connection settings for one plugin invocation."""

    model_config = ConfigDict(frozen=True)

    host: str
    email: str
    token: str
    project_key: str | None = None
    ticket_pattern: str = DEFAULT_TICKET_PATTERN

    @field_validator("host")
    @classmethod
    def normalize_host(cls, v: str) -> str:
        """Keep only the domain: no scheme, no trailing slash."""
        host = v.strip()
        for scheme in ("https://", "http://"):
            if host.lower().startswith(scheme):
                host = host[len(scheme) :]
                break
        host = host.rstrip("/")
        if not host:
            raise ValueError("Jira host must not be empty")
        return host


class JiraVersion(BaseModel):
    """A version record as returned by the Jira REST API."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    name: str
    project: str | None = None
    project_id: int | None = Field(default=None, alias="projectId")
    released: bool = False
    release_date: str | None = Field(default=None, alias="releaseDate")


class Commit(BaseModel):
    """A commit supplied by the release host."""

    model_config = ConfigDict(extra="allow")

    message: str | None = None
    hash: str | None = None


class NextRelease(BaseModel):
    """The release being published."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: str
    git_tag: str | None = Field(default=None, alias="gitTag")
    channel: str | None = None


class ReleaseContext(BaseModel):
    """Release information handed to ``publish``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    next_release: NextRelease = Field(alias="nextRelease")
    commits: list[Commit] = Field(default_factory=list)


class PluginConfig(BaseModel):
    """Plugin options."""

    ticket_pattern: str | None = None
    dry_run: bool = False
    max_workers: int | None = Field(default=None, ge=1)


class TicketUpdateResult(BaseModel):
    """Outcome of applying the fix version to one ticket."""

    issue_key: str
    success: bool
    error: str | None = None


class PublishResult(BaseModel):
    """Summary of a publish run."""

    version: JiraVersion | None = None
    issue_keys: list[str] = Field(default_factory=list)
    results: list[TicketUpdateResult] = Field(default_factory=list)
    dry_run: bool = False

    @property
    def updated(self) -> list[str]:
        return [r.issue_key for r in self.results if r.success]

    @property
    def failed(self) -> list[str]:
        return [r.issue_key for r in self.results if not r.success]
