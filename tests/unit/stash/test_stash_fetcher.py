"""Tests for the Stash fetcher facade."""

import json
from unittest.mock import MagicMock, patch

import httpx

from stash_build_status.stash import StashFetcher


def test_fetcher_delegates_set_build_status(stash_config, build_status):
    """Test set_build_status goes through the builds operations."""
    with patch("httpx.Client", MagicMock()):
        fetcher = StashFetcher(stash_config)
    fetcher.builds = MagicMock()
    fetcher.builds.set_build_status.return_value = build_status

    result = fetcher.set_build_status("a" * 40, build_status)

    fetcher.builds.set_build_status.assert_called_once_with(
        commit_id="a" * 40, status=build_status
    )
    assert result == build_status


def test_fetcher_context_manager_closes_session(stash_config):
    """Test leaving the with block closes the HTTP session."""
    with patch("httpx.Client", MagicMock()) as mock_client:
        with StashFetcher(stash_config):
            pass

    mock_client.return_value.close.assert_called_once()


def test_fetcher_posts_normalized_state_over_http(stash_config, build_status):
    """Test the JSON body sent to Stash carries a state the host accepts."""
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(204)

    fetcher = StashFetcher(stash_config)
    fetcher.client.session.close()
    fetcher.client.session = httpx.Client(transport=httpx.MockTransport(handler))
    status = build_status.model_copy(update={"state": "in-progress"})

    with fetcher:
        result = fetcher.set_build_status("a" * 40, status)

    assert len(requests) == 1
    assert requests[0].url == (
        f"https://stash.example.com/rest/build-status/1.0/commits/{'a' * 40}"
    )
    assert json.loads(requests[0].content)["state"] == "INPROGRESS"
    assert result.state == "in-progress"
