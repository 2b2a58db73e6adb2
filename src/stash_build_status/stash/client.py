"""Stash REST API client."""

import logging
import types
from typing import Any

import httpx

from ..exceptions import StashApiError
from .config import StashConfig

logger = logging.getLogger("stash-build-status.stash")


class StashClient:
    """Client for the Stash REST API."""

    def __init__(self, config: StashConfig) -> None:
        """Initialize Stash client.

        Args:
            config: Stash configuration
        """
        self.config = config
        self.root_url = config.url
        self.session = self._create_session()

    def _create_session(self) -> httpx.Client:
        """Create HTTP session with authentication.

        Returns:
            Authenticated HTTP session
        """
        session = httpx.Client(verify=self.config.ssl_verify, timeout=self.config.timeout)
        session.auth = self.config.get_auth()
        session.headers.update({"Accept": "application/json"})
        return session

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send POST request to the Stash API.

        Args:
            path: API endpoint path (without host URL)
            json: JSON request body
            params: Query parameters

        Returns:
            JSON response data, or an empty dict when the host sends no body

        Raises:
            StashApiError: If the request fails
        """
        url = f"{self.root_url}{path}"
        logger.debug(f"Sending POST request to {url}")

        try:
            response = self.session.post(url, json=json, params=params)
            response.raise_for_status()
            if response.status_code == httpx.codes.NO_CONTENT or not response.content:
                return {}
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error {e.response.status_code} for {url}: {e.response.text}"
            )
            raise StashApiError(
                f"HTTP error: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error for {url}: {str(e)}")
            raise StashApiError(f"Request error: {str(e)}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON in response from {url}: {str(e)}")
            raise StashApiError(f"Invalid response: {str(e)}") from e

    def close(self) -> None:
        """Close HTTP session."""
        self.session.close()

    def __enter__(self) -> "StashClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        self.close()
