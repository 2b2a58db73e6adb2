"""Pytest fixtures for Stash client tests."""

from unittest.mock import MagicMock

import pytest

from stash_build_status.models import BuildStatus
from stash_build_status.stash.client import StashClient
from stash_build_status.stash.config import StashConfig


@pytest.fixture
def stash_config():
    """Create a StashConfig instance for tests."""
    return StashConfig(
        url="https://stash.example.com",
        username="username",
        password="password",
        ssl_verify=True,
    )


@pytest.fixture
def stash_client(stash_config):
    """Create a StashClient with mocked session."""
    client = StashClient(stash_config)
    client.session = MagicMock()
    return client


@pytest.fixture
def build_status():
    """A build status ready to publish."""
    return BuildStatus(
        state="SUCCESSFUL",
        key="unit-tests",
        name="unit-tests-1234",
        description="build passed",
        url="https://ci.example.com/teams/main/pipelines/p/jobs/unit-tests/builds/3",
    )
