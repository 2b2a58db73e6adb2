"""Constants for the Stash build status integration."""

from typing import Final

# API endpoints
BUILD_STATUS_PATH: Final[str] = "/rest/build-status/1.0/commits"

# Default values
DEFAULT_SSL_VERIFY: Final[bool] = True
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0
