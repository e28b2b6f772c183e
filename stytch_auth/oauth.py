"""
OAuth resource

Exchanges the token returned by an OAuth provider callback for a user and
session.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from ._wire import dump, null_keys, unknown_fields
from .entities import Session, User, parse_session, parse_user
from .shared import async_request, request
from .types import AsyncTransport, FetchConfig, RequestConfig, Transport


@dataclass
class OAuthAuthenticateRequest:
    session_token: Optional[str] = None
    session_jwt: Optional[str] = None
    session_duration_minutes: Optional[int] = None
    session_custom_claims: Optional[Dict[str, Any]] = None
    code_verifier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class ProvidersValues:
    """Tokens issued by the upstream identity provider."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None
    expires_at: Optional[int] = None
    scopes: List[str] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProvidersValues":
        return cls(
            access_token=data.get("access_token"),
            refresh_token=data.get("refresh_token"),
            id_token=data.get("id_token"),
            expires_at=data.get("expires_at"),
            scopes=data.get("scopes") or [],
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class OAuthAuthenticateResponse:
    status_code: int
    request_id: str
    user_id: str
    oauth_user_registration_id: str
    provider_subject: str
    provider_type: str
    user: Optional[User] = None
    session_token: Optional[str] = None
    session_jwt: Optional[str] = None
    session: Optional[Session] = None
    provider_values: ProvidersValues = field(default_factory=ProvidersValues)
    reset_sessions: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuthAuthenticateResponse":
        provider_values = data.get("provider_values")
        return cls(
            status_code=data.get("status_code", 0),
            request_id=data.get("request_id", ""),
            user_id=data.get("user_id", ""),
            oauth_user_registration_id=data.get("oauth_user_registration_id", ""),
            provider_subject=data.get("provider_subject", ""),
            provider_type=data.get("provider_type", ""),
            user=parse_user(data.get("user")),
            session_token=data.get("session_token"),
            session_jwt=data.get("session_jwt"),
            session=parse_session(data.get("session")),
            provider_values=(
                ProvidersValues.from_dict(provider_values) if provider_values else ProvidersValues()
            ),
            reset_sessions=data.get("reset_sessions", False),
            extras=unknown_fields(cls, data),
        )


def _authenticate_config(token: str, data: Optional[OAuthAuthenticateRequest]) -> RequestConfig:
    body: Dict[str, Any] = {"token": token}
    if data is not None:
        body.update(data.to_dict())
    return RequestConfig(method="POST", url=f"{OAuth.base_path}/authenticate", data=body)


class OAuth:
    """OAuth operations for the sync client."""

    base_path = "oauth"

    def __init__(self, fetch_config: FetchConfig, transport: Transport) -> None:
        self._fetch_config = fetch_config
        self._transport = transport

    def authenticate(
        self, token: str, data: Optional[OAuthAuthenticateRequest] = None
    ) -> OAuthAuthenticateResponse:
        """Authenticate the token from the OAuth callback redirect."""
        response = request(self._fetch_config, _authenticate_config(token, data), self._transport)
        return OAuthAuthenticateResponse.from_dict(response)


class AsyncOAuth:
    """OAuth operations for the async client."""

    base_path = OAuth.base_path

    def __init__(self, fetch_config: FetchConfig, transport: AsyncTransport) -> None:
        self._fetch_config = fetch_config
        self._transport = transport

    async def authenticate(
        self, token: str, data: Optional[OAuthAuthenticateRequest] = None
    ) -> OAuthAuthenticateResponse:
        response = await async_request(
            self._fetch_config, _authenticate_config(token, data), self._transport
        )
        return OAuthAuthenticateResponse.from_dict(response)
