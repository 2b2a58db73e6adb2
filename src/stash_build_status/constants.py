"""Constants shared across stash-build-status."""

from typing import Final

# Build states accepted by the Stash build-status endpoint
STATE_SUCCESSFUL: Final[str] = "SUCCESSFUL"
STATE_FAILED: Final[str] = "FAILED"
STATE_IN_PROGRESS: Final[str] = "INPROGRESS"
BUILD_STATES: Final[frozenset[str]] = frozenset(
    {STATE_SUCCESSFUL, STATE_FAILED, STATE_IN_PROGRESS}
)

# Concourse build metadata environment variables
ENV_BUILD_ID: Final[str] = "BUILD_ID"
ENV_BUILD_NAME: Final[str] = "BUILD_NAME"
ENV_BUILD_JOB_NAME: Final[str] = "BUILD_JOB_NAME"
ENV_BUILD_PIPELINE_NAME: Final[str] = "BUILD_PIPELINE_NAME"
ENV_BUILD_TEAM_NAME: Final[str] = "BUILD_TEAM_NAME"
ENV_ATC_EXTERNAL_URL: Final[str] = "ATC_EXTERNAL_URL"

# Hard-coded until https://github.com/concourse/concourse/issues/616 is resolved
DEFAULT_TEAM_NAME: Final[str] = "main"

# Retry policy
DEFAULT_RETRY_DELAY_SECONDS: Final[float] = 1.0

# Length of a full git commit SHA
COMMIT_SHA_LENGTH: Final[int] = 40

# Metadata entry names, in the order they are emitted
METADATA_FIELDS: Final[tuple[str, ...]] = (
    "commit",
    "date_added",
    "description",
    "key",
    "name",
    "state",
    "url",
)
