"""Shared pytest fixtures for stash-build-status unit tests."""

import logging

import pytest

from stash_build_status.environment import BuildEnvironment
from stash_build_status.logging_config import ROOT_LOGGER_NAME
from stash_build_status.models import PublishRequest

COMMIT = "abc123" + "0" * 34


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so later tests don't log to closed streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def commit():
    """A resolved 40 character commit SHA."""
    return COMMIT


@pytest.fixture
def build_environment():
    """Concourse build metadata for a sample build."""
    return BuildEnvironment(
        job_name="unit-tests",
        build_id="1234",
        build_name="3",
        pipeline_name="my-pipeline",
        team_name="",
        atc_external_url="https://ci.example.com",
    )


@pytest.fixture
def request_data():
    """Raw JSON-compatible request for the out script."""
    return {
        "source": {
            "host": "https://stash.example.com",
            "username": "ci-bot",
            "password": "secret",
            "retry_attempts": 2,
            "skip_ssl_verification": False,
        },
        "version": {"ref": ""},
        "params": {
            "repository": "repo",
            "state": "successful",
            "description": "build passed",
        },
    }


@pytest.fixture
def publish_request(request_data):
    """Parsed request for the out script."""
    return PublishRequest.model_validate(request_data)
