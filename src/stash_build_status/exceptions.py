class StashBuildStatusError(Exception):
    """Base exception for stash-build-status errors."""

    pass


class InvalidRequestError(StashBuildStatusError):
    """Raised when the resource request read from stdin is malformed."""

    pass


class CommitResolutionError(StashBuildStatusError):
    """Raised when the current commit of the working copy cannot be read.

    This is a local failure and is never retried.
    """

    pass


class StashApiError(StashBuildStatusError):
    """Raised when a Stash REST API request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExhaustedRetriesError(StashBuildStatusError):
    """Raised when every attempt to set the build status has failed."""

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(
            f"Failed to set the build status after {attempts} attempts: {last_error}"
        )
        self.attempts = attempts
        self.last_error = last_error


class OutputError(StashBuildStatusError):
    """Raised when the resource response cannot be written out."""

    pass
