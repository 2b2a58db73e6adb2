"""Tests for the resource request and response models."""

import pytest
from pydantic import ValidationError

from stash_build_status.models import (
    BuildStatus,
    PublishRequest,
    PublishResult,
    Source,
    normalize_state,
)


def test_publish_request_parses_concourse_json(request_data):
    """Test the stdin request maps onto the models."""
    request = PublishRequest.model_validate(request_data)

    assert request.source.host == "https://stash.example.com"
    assert request.source.retry_attempts == 2
    assert request.source.skip_ssl_verification is False
    assert request.params.repository == "repo"
    assert request.params.state == "successful"
    assert request.params.description == "build passed"


def test_publish_request_defaults(request_data):
    """Test optional fields fall back to their defaults."""
    del request_data["version"]
    del request_data["source"]["retry_attempts"]
    del request_data["source"]["skip_ssl_verification"]
    del request_data["params"]["description"]

    request = PublishRequest.model_validate(request_data)

    assert request.version.ref == ""
    assert request.source.retry_attempts == 0
    assert request.source.skip_ssl_verification is False
    assert request.params.description == ""


def test_publish_request_is_immutable(publish_request):
    """Test the request cannot be changed once parsed."""
    with pytest.raises(ValidationError):
        publish_request.params.state = "failed"


def test_negative_retry_attempts_rejected():
    """Test the retry budget cannot be negative."""
    with pytest.raises(ValidationError):
        Source(host="h", username="u", password="p", retry_attempts=-1)


@pytest.mark.parametrize(
    "state", ["SUCCESSFUL", "successful", "failed", "in-progress", "INPROGRESS"]
)
def test_state_accepted_and_kept_verbatim(request_data, state):
    """Test known states are accepted without being rewritten."""
    request_data["params"]["state"] = state

    request = PublishRequest.model_validate(request_data)

    assert request.params.state == state


def test_unknown_state_rejected(request_data):
    """Test an unsupported state fails validation."""
    request_data["params"]["state"] = "exploded"

    with pytest.raises(ValidationError) as excinfo:
        PublishRequest.model_validate(request_data)

    assert "Unsupported build state" in str(excinfo.value)


def test_normalize_state():
    assert normalize_state("in-progress") == "INPROGRESS"
    assert normalize_state("In_Progress") == "INPROGRESS"


def test_build_status_from_raw():
    """Test a Stash build status payload is parsed."""
    status = BuildStatus.from_raw(
        {
            "state": "FAILED",
            "key": "BUILD-124",
            "name": "Test build",
            "url": "https://ci.example.com/BUILD-124",
            "description": None,
            "dateAdded": 1602777700000,
        }
    )

    assert status.state == "FAILED"
    assert status.key == "BUILD-124"
    assert status.description == ""
    assert status.date_added == 1602777700000


def test_build_status_api_dict_omits_date_added():
    """Test dateAdded is left for the host to set."""
    status = BuildStatus(state="SUCCESSFUL", key="k", name="n", date_added=5)

    assert "dateAdded" not in status.to_api_dict()
    assert "date_added" not in status.to_api_dict()


def test_publish_result_metadata_order():
    """Test metadata has seven entries in the fixed order."""
    status = BuildStatus(state="successful", key="", name="", description="", url="")

    result = PublishResult.from_status("f" * 40, status)

    assert [item.name for item in result.metadata] == [
        "commit",
        "date_added",
        "description",
        "key",
        "name",
        "state",
        "url",
    ]
    assert result.version.ref == "f" * 40
    assert result.metadata[0].value == "f" * 40
    assert result.metadata[1].value == "0"
    assert result.metadata[5].value == "successful"


def test_build_status_api_dict_uses_stash_state_spelling():
    """Test the request body state is one Stash accepts, the model keeps the original."""
    status = BuildStatus(state="in-progress", key="k", name="n")

    assert status.to_api_dict()["state"] == "INPROGRESS"
    assert status.state == "in-progress"
