"""Publishing a build status for the checked-out commit."""

import json
import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, TextIO

from .constants import DEFAULT_RETRY_DELAY_SECONDS
from .environment import BuildEnvironment
from .exceptions import ExhaustedRetriesError, OutputError
from .git import resolve_commit
from .logging_config import get_logger, log_operation
from .models import BuildStatus, PublishRequest, PublishResult

logger = get_logger("stash-build-status.publisher")


class StatusClient(Protocol):
    """Anything that can set the build status of a commit."""

    def set_build_status(self, commit_id: str, status: BuildStatus) -> BuildStatus: ...


class StatusPublisher:
    """Resolves HEAD, builds the status and pushes it, retrying on failure."""

    def __init__(
        self,
        client: StatusClient,
        environment: BuildEnvironment,
        retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        commit_resolver: Callable[[Path], str] = resolve_commit,
    ) -> None:
        """Initialize the publisher.

        Args:
            client: Client used to set the build status
            environment: Build metadata for the running step
            retry_delay: Seconds to wait between attempts
            sleep: Function used to wait between attempts
            commit_resolver: Function returning the HEAD commit of a directory
        """
        self.client = client
        self.environment = environment
        self.retry_delay = retry_delay
        self.sleep = sleep
        self.commit_resolver = commit_resolver

    def build_status(self, request: PublishRequest) -> BuildStatus:
        """Assemble the status for this build from the request and environment."""
        return BuildStatus(
            state=request.params.state,
            key=self.environment.status_key,
            name=self.environment.status_name,
            description=request.params.description,
            url=self.environment.build_url(),
        )

    def publish(self, request: PublishRequest, base_dir: str | Path) -> PublishResult:
        """Set the build status for the repository's current commit.

        Args:
            request: The resource request
            base_dir: Directory the repository path is relative to

        Returns:
            The resource response describing the published status

        Raises:
            CommitResolutionError: If HEAD cannot be read; not retried
            ExhaustedRetriesError: If every publish attempt failed
        """
        repository_path = Path(base_dir) / request.params.repository
        commit = self.commit_resolver(repository_path)
        logger.info(f"Setting build status for {commit}")

        status = self.build_status(request)
        logger.info(f"Build status {status!r}")

        with log_operation(logger, "set_build_status", commit=commit[:12]):
            published = self._publish_with_retries(
                commit, status, request.source.retry_attempts
            )
        logger.info("Status set successfully")

        return PublishResult.from_status(commit, published)

    def _publish_with_retries(
        self, commit: str, status: BuildStatus, retry_attempts: int
    ) -> BuildStatus:
        max_attempts = 1 + retry_attempts
        attempt = 0
        while True:
            attempt += 1
            try:
                return self.client.set_build_status(commit, status)
            except Exception as e:  # noqa: BLE001 - every client failure is retried
                if attempt >= max_attempts:
                    raise ExhaustedRetriesError(attempt, e) from e
                logger.warning(
                    f"Failed to set build status (attempt {attempt} of "
                    f"{max_attempts}): {e}, retrying..."
                )
                self.sleep(self.retry_delay)


def emit(result: PublishResult, stream: TextIO) -> None:
    """Write the resource response as JSON.

    Raises:
        OutputError: If the response cannot be encoded or written
    """
    try:
        payload = json.dumps(result.model_dump(mode="json"))
        stream.write(payload)
        stream.flush()
    except (TypeError, ValueError, OSError) as e:
        raise OutputError(f"Failed to write resource response: {e}") from e
