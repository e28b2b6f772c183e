"""
Stytch Auth SDK Type Definitions

Configuration and pipeline value types shared by the sync and async clients.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, Literal, Mapping, Optional, Protocol, Union, runtime_checkable


SDK_VERSION = "0.1.0"

TEST_BASE_URL = "https://test.stytch.com/v1/"
LIVE_BASE_URL = "https://api.stytch.com/v1/"

ENVIRONMENTS: Dict[str, str] = {
    "test": TEST_BASE_URL,
    "live": LIVE_BASE_URL,
}

# Request timeout in seconds (10 minutes)
DEFAULT_TIMEOUT = 600.0

HTTPMethod = Literal["GET", "DELETE", "POST", "PUT"]
ParamValue = Union[str, int, float]


@dataclass(frozen=True)
class RequestConfig:
    """One outbound call: method, path relative to the base URL, params and body."""

    method: HTTPMethod
    url: str
    params: Optional[Mapping[str, ParamValue]] = None
    data: Any = None


@dataclass(frozen=True)
class FetchConfig:
    """Connection settings built once per client and never mutated."""

    base_url: str
    headers: Mapping[str, str]
    timeout: float = DEFAULT_TIMEOUT
    # httpx.BaseTransport / httpx.AsyncBaseTransport used by the default transports
    agent: Any = None


@dataclass(frozen=True)
class OutboundRequest:
    """Fully formed request handed to a transport."""

    method: str
    url: str
    headers: Dict[str, str]
    timeout: float
    content: Optional[bytes] = None


@dataclass
class RawResponse:
    """Undecoded response returned by a transport."""

    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)


@runtime_checkable
class Transport(Protocol):
    """Performs exactly one network call. Raises on transport failure."""

    def __call__(self, request: OutboundRequest) -> RawResponse:
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Awaitable counterpart of ``Transport``."""

    def __call__(self, request: OutboundRequest) -> Awaitable[RawResponse]:
        ...


@dataclass
class ClientConfig:
    """SDK configuration options."""

    # Stytch project ID (project-test-xxx or project-live-xxx)
    project_id: str
    # Project secret
    secret: str
    # Environment: "test" or "live" (ignored when base_url is set)
    env: str = "test"
    # Custom API base URL
    base_url: Optional[str] = None
    # Request timeout in seconds
    timeout: float = DEFAULT_TIMEOUT
    # Extra headers sent with every request
    headers: Optional[Dict[str, str]] = None
    # httpx transport used by the default transport (proxies, custom TLS, mocks)
    agent: Any = None
    # Replaces the default httpx transport entirely
    transport: Optional[Union[Transport, AsyncTransport]] = None
    # Enable debug logging
    debug: bool = False
