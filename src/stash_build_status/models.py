"""Data models for the stash-build-status resource."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import BUILD_STATES, METADATA_FIELDS


def normalize_state(state: str) -> str:
    """Fold a build state into the Stash spelling, e.g. "in-progress" -> "INPROGRESS"."""
    return state.replace("-", "").replace("_", "").upper()


class ResourceModel(BaseModel):
    """Base for the immutable request/response models."""

    model_config = ConfigDict(frozen=True)


class Source(ResourceModel):
    """The `source` block: where the Stash host is and how to reach it."""

    host: str
    username: str
    password: str
    retry_attempts: int = Field(default=0, ge=0)
    skip_ssl_verification: bool = False


class Version(ResourceModel):
    """A resource version, identified by a commit ref."""

    ref: str = ""


class Params(ResourceModel):
    """The `params` block of a put step."""

    repository: str
    commit: str = ""
    state: str
    description: str = ""

    @field_validator("state")
    @classmethod
    def check_state(cls, value: str) -> str:
        if normalize_state(value) not in BUILD_STATES:
            allowed = ", ".join(sorted(BUILD_STATES))
            raise ValueError(f"Unsupported build state {value!r} (expected {allowed})")
        return value


class PublishRequest(ResourceModel):
    """Resource request read from stdin for the `out` script."""

    source: Source
    version: Version = Field(default_factory=Version)
    params: Params


class CheckRequest(ResourceModel):
    """Resource request read from stdin for the `check` and `in` scripts."""

    source: Source
    version: Version | None = None


class BuildStatus(ResourceModel):
    """Build status attached to a commit on the Stash host."""

    state: str
    key: str
    name: str
    description: str = ""
    url: str = ""
    date_added: int = 0  # milliseconds since the epoch, set by the host

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to the build-status API request body.

        Returns:
            Dictionary representation accepted by Stash
        """
        return {
            "state": normalize_state(self.state),
            "key": self.key,
            "name": self.name,
            "url": self.url,
            "description": self.description,
        }

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "BuildStatus":
        """Create build status model from raw API data.

        Args:
            data: Raw API response

        Returns:
            BuildStatus instance
        """
        return cls(
            state=data.get("state", ""),
            key=data.get("key", ""),
            name=data.get("name", ""),
            description=data.get("description") or "",
            url=data.get("url", ""),
            date_added=int(data.get("dateAdded") or 0),
        )


class MetadataItem(ResourceModel):
    """A name/value pair shown in the Concourse UI."""

    name: str
    value: str


class PublishResult(ResourceModel):
    """Response written to stdout after a successful put."""

    version: Version
    metadata: list[MetadataItem]

    @classmethod
    def from_status(cls, commit: str, status: BuildStatus) -> "PublishResult":
        """Build the response for a published status.

        Args:
            commit: The resolved commit SHA
            status: The status as accepted by the host

        Returns:
            PublishResult with metadata in the fixed emission order
        """
        values = {
            "commit": commit,
            "date_added": str(status.date_added),
            "description": status.description,
            "key": status.key,
            "name": status.name,
            "state": status.state,
            "url": status.url,
        }
        return cls(
            version=Version(ref=commit),
            metadata=[
                MetadataItem(name=name, value=values[name]) for name in METADATA_FIELDS
            ],
        )
