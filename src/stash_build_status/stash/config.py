"""Config for the Stash build status integration."""

from ..models import Source
from .constants import DEFAULT_SSL_VERIFY, DEFAULT_TIMEOUT_SECONDS


class StashConfig:
    """Configuration for a Stash (Bitbucket Server) instance."""

    def __init__(
        self,
        url: str,
        username: str | None = None,
        password: str | None = None,
        ssl_verify: bool = DEFAULT_SSL_VERIFY,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize Stash config.

        Args:
            url: Stash host URL
            username: Username for basic auth
            password: Password for basic auth
            ssl_verify: Whether to verify SSL certificates
            timeout: Request timeout in seconds
        """
        if not url:
            raise ValueError("A Stash host URL is required.")

        self.url = url.rstrip("/")
        self.username = username
        self.password = password
        self.ssl_verify = ssl_verify
        self.timeout = timeout

        if not username or not password:
            raise ValueError(
                "For basic authentication, both username and password are required."
            )

    @classmethod
    def from_source(cls, source: Source) -> "StashConfig":
        """Create Stash config from the resource source configuration.

        Args:
            source: The `source` block of the resource request

        Returns:
            StashConfig instance

        Raises:
            ValueError: If the host or credentials are missing
        """
        return cls(
            url=source.host,
            username=source.username,
            password=source.password,
            ssl_verify=not source.skip_ssl_verification,
        )

    def get_auth(self) -> tuple[str, str]:
        """Get basic authentication credentials for the HTTP client.

        Returns:
            (username, password) tuple
        """
        return (self.username, self.password)

    def __repr__(self) -> str:
        return (
            f"StashConfig(url={self.url!r}, username={self.username!r}, "
            f"ssl_verify={self.ssl_verify!r})"
        )
