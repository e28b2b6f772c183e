"""
Stytch Auth SDK Client

Main client classes. Both clients validate their configuration once, build
a read-only ``FetchConfig`` and hand it, with a transport, to the resource
namespaces. Calls are independent; nothing is cached or retried.
"""

import base64
import logging
from typing import Any, Dict
from urllib.parse import urlparse

from .errors import ConfigurationError
from .oauth import AsyncOAuth, OAuth
from .passwords import AsyncPasswords, Passwords
from .transport import AsyncHttpxTransport, HttpxTransport
from .types import ENVIRONMENTS, SDK_VERSION, AsyncTransport, ClientConfig, FetchConfig, Transport


logger = logging.getLogger("stytch_auth")

LOCAL_HOSTS = ("localhost", "127.0.0.1")


def _resolve_base_url(config: ClientConfig) -> str:
    if config.base_url is None:
        if config.env not in ENVIRONMENTS:
            raise ConfigurationError(
                "INVALID_ENV",
                f"env must be one of {sorted(ENVIRONMENTS)}, got {config.env!r}",
            )
        return ENVIRONMENTS[config.env]

    try:
        parsed = urlparse(config.base_url)
        # Raises ValueError on a malformed port
        parsed.port
    except ValueError as e:
        raise ConfigurationError("INVALID_BASE_URL", "base_url could not be parsed", e) from e

    if not parsed.netloc:
        raise ConfigurationError("INVALID_BASE_URL", f"base_url has no host: {config.base_url!r}")
    if parsed.scheme != "https" and not (parsed.scheme == "http" and parsed.hostname in LOCAL_HOSTS):
        raise ConfigurationError("INVALID_BASE_URL", "base_url must use the https scheme")

    base_url = config.base_url
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url


def build_fetch_config(config: ClientConfig) -> FetchConfig:
    """Validate ``config`` and derive the connection settings for every call."""
    if not config.project_id:
        raise ConfigurationError("MISSING_PROJECT_ID", "project_id is required")
    if not config.secret:
        raise ConfigurationError("MISSING_SECRET", "secret is required")
    if config.timeout <= 0:
        raise ConfigurationError("INVALID_TIMEOUT", "timeout must be positive")

    credentials = base64.b64encode(f"{config.project_id}:{config.secret}".encode("utf-8")).decode("ascii")
    headers: Dict[str, str] = {
        "Content-Type": "application/json",
        "User-Agent": f"stytch-auth-python/{SDK_VERSION}",
        **(config.headers or {}),
        "Authorization": f"Basic {credentials}",
    }

    return FetchConfig(
        base_url=_resolve_base_url(config),
        headers=headers,
        timeout=config.timeout,
        agent=config.agent,
    )


class StytchClient:
    """
    Stytch Auth Client - Synchronous SDK entry point.

    Example:
        with StytchClient(ClientConfig(project_id="project-test-...", secret="secret-test-...")) as client:
            client.passwords.authenticate(AuthenticateRequest(email=..., password=...))
    """

    def __init__(self, config: ClientConfig) -> None:
        """Initialize the client. Raises ``ConfigurationError`` on bad config."""
        self._fetch_config = build_fetch_config(config)
        self._debug = config.debug

        self._owns_transport = config.transport is None
        self._transport: Transport = config.transport or HttpxTransport(config.agent)  # type: ignore[assignment]

        # Namespaces
        self.passwords = Passwords(self._fetch_config, self._transport)
        self.oauth = OAuth(self._fetch_config, self._transport)

        self._log(f"StytchClient initialized (base_url={self._fetch_config.base_url})")

    @property
    def fetch_config(self) -> FetchConfig:
        return self._fetch_config

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[Stytch] {message}", *args)

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            self._transport.close()

    def __enter__(self) -> "StytchClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class StytchAsyncClient:
    """
    Stytch Auth Async Client - Asynchronous SDK entry point.

    Ideal for FastAPI, aiohttp, and other async frameworks.
    """

    def __init__(self, config: ClientConfig) -> None:
        """Initialize the async client. Raises ``ConfigurationError`` on bad config."""
        self._fetch_config = build_fetch_config(config)
        self._debug = config.debug

        self._owns_transport = config.transport is None
        self._transport: AsyncTransport = config.transport or AsyncHttpxTransport(config.agent)  # type: ignore[assignment]

        self.passwords = AsyncPasswords(self._fetch_config, self._transport)
        self.oauth = AsyncOAuth(self._fetch_config, self._transport)

        self._log(f"StytchAsyncClient initialized (base_url={self._fetch_config.base_url})")

    @property
    def fetch_config(self) -> FetchConfig:
        return self._fetch_config

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[Stytch] {message}", *args)

    async def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_transport and isinstance(self._transport, AsyncHttpxTransport):
            await self._transport.aclose()

    async def __aenter__(self) -> "StytchAsyncClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


# =============================================================================
# Factory Functions
# =============================================================================

def create_stytch_client(config: ClientConfig) -> StytchClient:
    """Create a new synchronous client."""
    return StytchClient(config)


def create_async_stytch_client(config: ClientConfig) -> StytchAsyncClient:
    """Create a new asynchronous client."""
    return StytchAsyncClient(config)
