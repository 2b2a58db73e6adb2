"""Stash (Bitbucket Server) build status integration."""

import types

from ..models import BuildStatus
from .builds import StashBuilds
from .client import StashClient
from .config import StashConfig


class StashFetcher:
    """Main interface for Stash build status operations."""

    def __init__(self, config: StashConfig) -> None:
        """Initialize Stash fetcher.

        Args:
            config: Stash configuration
        """
        self.config = config
        self.client = StashClient(config)
        self.builds = StashBuilds(self.client)

    def set_build_status(self, commit_id: str, status: BuildStatus) -> BuildStatus:
        """Set the build status for a commit.

        Args:
            commit_id: Commit ID (SHA)
            status: Build status to publish

        Returns:
            The status as accepted by the host
        """
        return self.builds.set_build_status(commit_id=commit_id, status=status)

    def close(self) -> None:
        """Close the client connection."""
        self.client.close()

    def __enter__(self) -> "StashFetcher":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["StashFetcher", "StashConfig", "StashClient", "StashBuilds"]
