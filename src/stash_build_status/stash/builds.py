"""Build status operations for Stash."""

import logging

from ..models import BuildStatus
from .client import StashClient
from .constants import BUILD_STATUS_PATH

logger = logging.getLogger("stash-build-status.stash")


class StashBuilds:
    """Stash build status operations."""

    def __init__(self, client: StashClient) -> None:
        """Initialize Stash build status operations.

        Args:
            client: Stash client
        """
        self.client = client

    def set_build_status(self, commit_id: str, status: BuildStatus) -> BuildStatus:
        """Set the build status for a commit.

        Posting the same status twice is safe: Stash keys statuses by
        commit and build key, so a repeat replaces the earlier entry.

        Args:
            commit_id: Commit ID (SHA)
            status: Build status to publish

        Returns:
            The published status, carrying the host's `dateAdded` when
            the host echoes it back

        Raises:
            StashApiError: If the API request fails
        """
        logger.debug(f"Setting build status for commit {commit_id}")

        # The build-status API lives outside the normal REST API base path
        response = self.client.post(
            f"{BUILD_STATUS_PATH}/{commit_id}", json=status.to_api_dict()
        )

        date_added = response.get("dateAdded") if response else None
        if date_added is None:
            return status
        return status.model_copy(update={"date_added": int(date_added)})
