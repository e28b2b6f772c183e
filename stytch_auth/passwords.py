"""
Passwords resource

Create, authenticate, reset and migrate password credentials.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Type, Union

from ._wire import dump, unknown_fields
from .entities import Attributes, Session, User, parse_session, parse_user
from .shared import async_request, request
from .types import AsyncTransport, FetchConfig, RequestConfig, Transport


# =============================================================================
# Requests
# =============================================================================

@dataclass
class CreateRequest:
    email: str
    password: str
    session_duration_minutes: Optional[int] = None
    session_custom_claims: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class AuthenticateRequest:
    email: str
    password: str
    session_token: Optional[str] = None
    session_jwt: Optional[str] = None
    session_duration_minutes: Optional[int] = None
    session_custom_claims: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class ResetByEmailStartRequest:
    email: str
    login_redirect_url: Optional[str] = None
    reset_password_redirect_url: Optional[str] = None
    reset_password_expiration_minutes: Optional[int] = None
    attributes: Optional[Attributes] = None
    code_challenge: Optional[str] = None
    locale: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(self, attributes=self.attributes.to_dict() if self.attributes else None)


@dataclass
class ResetByEmailOptions:
    ip_match_required: Optional[bool] = None
    user_agent_match_required: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class ResetByEmailRequest:
    """Optional fields sent alongside the reset token and new password."""

    options: Optional[ResetByEmailOptions] = None
    attributes: Optional[Attributes] = None
    session_token: Optional[str] = None
    session_jwt: Optional[str] = None
    session_duration_minutes: Optional[int] = None
    session_custom_claims: Optional[Dict[str, Any]] = None
    code_verifier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(
            self,
            options=self.options.to_dict() if self.options else None,
            attributes=self.attributes.to_dict() if self.attributes else None,
        )


@dataclass
class ResetByExistingPasswordRequest:
    email: str
    existing_password: str
    new_password: str
    session_token: Optional[str] = None
    session_jwt: Optional[str] = None
    session_duration_minutes: Optional[int] = None
    session_custom_claims: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class ResetBySessionRequest:
    password: str
    session_token: Optional[str] = None
    session_jwt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class StrengthCheckRequest:
    password: str
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


# =============================================================================
# Migration
# =============================================================================

@dataclass
class SaltConfig:
    """Salt layout for MD5 and SHA-1 hashes."""

    prepend_salt: Optional[str] = None
    append_salt: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SaltConfig":
        return cls(prepend_salt=data.get("prepend_salt"), append_salt=data.get("append_salt"))

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


MD5Config = SaltConfig
SHA1Config = SaltConfig


@dataclass
class Argon2Config:
    salt: str
    iteration_amount: int
    memory: int
    threads: int
    key_length: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Argon2Config":
        return cls(
            salt=data["salt"],
            iteration_amount=data["iteration_amount"],
            memory=data["memory"],
            threads=data["threads"],
            key_length=data["key_length"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class ScryptConfig:
    salt: str
    n_parameter: int
    r_parameter: int
    p_parameter: int
    key_length: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScryptConfig":
        return cls(
            salt=data["salt"],
            n_parameter=data["n_parameter"],
            r_parameter=data["r_parameter"],
            p_parameter=data["p_parameter"],
            key_length=data["key_length"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class _MigrateRequestBase:
    email: str
    hash: str

    HASH_TYPE: ClassVar[str]
    # Name of both the dataclass field and the wire key holding the hash config
    CONFIG_KEY: ClassVar[Optional[str]] = None
    CONFIG_TYPE: ClassVar[Optional[Type[Any]]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Shared envelope plus the single config object for this hash type."""
        body: Dict[str, Any] = {
            "email": self.email,
            "hash": self.hash,
            "hash_type": self.HASH_TYPE,
        }
        if self.CONFIG_KEY is not None:
            config = getattr(self, self.CONFIG_KEY)
            if config is not None:
                body[self.CONFIG_KEY] = config.to_dict()
        return body


@dataclass
class MD5MigrateRequest(_MigrateRequestBase):
    HASH_TYPE: ClassVar[str] = "md_5"
    CONFIG_KEY: ClassVar[Optional[str]] = "md_5_config"
    CONFIG_TYPE: ClassVar[Optional[Type[Any]]] = MD5Config

    md_5_config: Optional[MD5Config] = None


@dataclass
class BcryptMigrateRequest(_MigrateRequestBase):
    HASH_TYPE: ClassVar[str] = "bcrypt"


@dataclass
class Argon2IMigrateRequest(_MigrateRequestBase):
    HASH_TYPE: ClassVar[str] = "argon_2i"
    CONFIG_KEY: ClassVar[Optional[str]] = "argon_2_config"
    CONFIG_TYPE: ClassVar[Optional[Type[Any]]] = Argon2Config

    argon_2_config: Optional[Argon2Config] = None


@dataclass
class Argon2IDMigrateRequest(_MigrateRequestBase):
    HASH_TYPE: ClassVar[str] = "argon_2id"
    CONFIG_KEY: ClassVar[Optional[str]] = "argon_2_config"
    CONFIG_TYPE: ClassVar[Optional[Type[Any]]] = Argon2Config

    argon_2_config: Optional[Argon2Config] = None


@dataclass
class SHA1MigrateRequest(_MigrateRequestBase):
    HASH_TYPE: ClassVar[str] = "sha_1"
    CONFIG_KEY: ClassVar[Optional[str]] = "sha_1_config"
    CONFIG_TYPE: ClassVar[Optional[Type[Any]]] = SHA1Config

    sha_1_config: Optional[SHA1Config] = None


@dataclass
class ScryptMigrateRequest(_MigrateRequestBase):
    HASH_TYPE: ClassVar[str] = "scrypt"
    CONFIG_KEY: ClassVar[Optional[str]] = "scrypt_config"
    CONFIG_TYPE: ClassVar[Optional[Type[Any]]] = ScryptConfig

    scrypt_config: Optional[ScryptConfig] = None


MigrateRequest = Union[
    MD5MigrateRequest,
    BcryptMigrateRequest,
    Argon2IMigrateRequest,
    Argon2IDMigrateRequest,
    SHA1MigrateRequest,
    ScryptMigrateRequest,
]

MIGRATE_REQUEST_TYPES: Dict[str, Type[_MigrateRequestBase]] = {
    cls.HASH_TYPE: cls
    for cls in (
        MD5MigrateRequest,
        BcryptMigrateRequest,
        Argon2IMigrateRequest,
        Argon2IDMigrateRequest,
        SHA1MigrateRequest,
        ScryptMigrateRequest,
    )
}


def migrate_request_from_dict(data: Dict[str, Any]) -> MigrateRequest:
    """Narrow a plain dict to its migrate variant by ``hash_type``."""
    hash_type = data.get("hash_type")
    cls = MIGRATE_REQUEST_TYPES.get(hash_type)  # type: ignore[arg-type]
    if cls is None:
        raise ValueError(f"Unsupported hash_type: {hash_type!r}")

    kwargs: Dict[str, Any] = {"email": data["email"], "hash": data["hash"]}
    if cls.CONFIG_KEY is not None and data.get(cls.CONFIG_KEY) is not None:
        kwargs[cls.CONFIG_KEY] = cls.CONFIG_TYPE.from_dict(data[cls.CONFIG_KEY])  # type: ignore[union-attr]
    return cls(**kwargs)  # type: ignore[return-value]


# =============================================================================
# Responses
# =============================================================================

@dataclass
class CreateResponse:
    status_code: int
    request_id: str
    user_id: str
    email_id: str
    user: Optional[User] = None
    session_token: Optional[str] = None
    session_jwt: Optional[str] = None
    session: Optional[Session] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreateResponse":
        return cls(
            status_code=data.get("status_code", 0),
            request_id=data.get("request_id", ""),
            user_id=data.get("user_id", ""),
            email_id=data.get("email_id", ""),
            user=parse_user(data.get("user")),
            session_token=data.get("session_token"),
            session_jwt=data.get("session_jwt"),
            session=parse_session(data.get("session")),
            extras=unknown_fields(cls, data),
        )


@dataclass
class AuthenticateResponse:
    """A user plus the session the call started or extended."""

    status_code: int
    request_id: str
    user_id: str
    user: Optional[User] = None
    session_token: Optional[str] = None
    session_jwt: Optional[str] = None
    session: Optional[Session] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthenticateResponse":
        return cls(
            status_code=data.get("status_code", 0),
            request_id=data.get("request_id", ""),
            user_id=data.get("user_id", ""),
            user=parse_user(data.get("user")),
            session_token=data.get("session_token"),
            session_jwt=data.get("session_jwt"),
            session=parse_session(data.get("session")),
            extras=unknown_fields(cls, data),
        )


# Reset endpoints answer with the same shape as authenticate
ResetByEmailResponse = AuthenticateResponse
ResetByExistingPasswordResponse = AuthenticateResponse
ResetBySessionResponse = AuthenticateResponse


@dataclass
class ResetByEmailStartResponse:
    status_code: int
    request_id: str
    user_id: str
    email_id: str
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResetByEmailStartResponse":
        return cls(
            status_code=data.get("status_code", 0),
            request_id=data.get("request_id", ""),
            user_id=data.get("user_id", ""),
            email_id=data.get("email_id", ""),
            extras=unknown_fields(cls, data),
        )


@dataclass
class StrengthFeedback:
    suggestions: List[str] = field(default_factory=list)
    warning: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StrengthFeedback":
        return cls(suggestions=data.get("suggestions", []), warning=data.get("warning", ""))


@dataclass
class StrengthCheckResponse:
    status_code: int
    request_id: str
    valid_password: bool
    score: int
    breached_password: bool
    feedback: StrengthFeedback = field(default_factory=StrengthFeedback)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StrengthCheckResponse":
        feedback_data = data.get("feedback")
        return cls(
            status_code=data.get("status_code", 0),
            request_id=data.get("request_id", ""),
            valid_password=data.get("valid_password", False),
            score=data.get("score", 0),
            breached_password=data.get("breached_password", False),
            feedback=StrengthFeedback.from_dict(feedback_data) if feedback_data else StrengthFeedback(),
            extras=unknown_fields(cls, data),
        )


@dataclass
class MigrateResponse:
    status_code: int
    request_id: str
    user_id: str
    email_id: str
    user_created: bool
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MigrateResponse":
        return cls(
            status_code=data.get("status_code", 0),
            request_id=data.get("request_id", ""),
            user_id=data.get("user_id", ""),
            email_id=data.get("email_id", ""),
            user_created=data.get("user_created", False),
            extras=unknown_fields(cls, data),
        )


# =============================================================================
# Resource
# =============================================================================

class _PasswordsBase:
    base_path = "passwords"

    def _endpoint(self, path: str) -> str:
        return f"{self.base_path}/{path}"

    def _reset_by_email_body(
        self, token: str, password: str, data: Optional[ResetByEmailRequest]
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"token": token, "password": password}
        if data is not None:
            body.update(data.to_dict())
        return body


class Passwords(_PasswordsBase):
    """Password operations for the sync client."""

    def __init__(self, fetch_config: FetchConfig, transport: Transport) -> None:
        self._fetch_config = fetch_config
        self._transport = transport

    def _post(self, url: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return request(
            self._fetch_config,
            RequestConfig(method="POST", url=url, data=data),
            self._transport,
        )

    def create(self, data: CreateRequest) -> CreateResponse:
        """Create a user with an email and password."""
        return CreateResponse.from_dict(self._post(self.base_path, data.to_dict()))

    def authenticate(self, data: AuthenticateRequest) -> AuthenticateResponse:
        """Authenticate a user by email and password."""
        return AuthenticateResponse.from_dict(self._post(self._endpoint("authenticate"), data.to_dict()))

    def reset_by_email_start(self, data: ResetByEmailStartRequest) -> ResetByEmailStartResponse:
        """Send a password reset email."""
        response = self._post(self._endpoint("email/reset/start"), data.to_dict())
        return ResetByEmailStartResponse.from_dict(response)

    def reset_by_email(
        self, token: str, password: str, data: Optional[ResetByEmailRequest] = None
    ) -> ResetByEmailResponse:
        """Complete a reset started by ``reset_by_email_start``."""
        body = self._reset_by_email_body(token, password, data)
        return ResetByEmailResponse.from_dict(self._post(self._endpoint("email/reset"), body))

    def reset_by_existing_password(
        self, data: ResetByExistingPasswordRequest
    ) -> ResetByExistingPasswordResponse:
        response = self._post(self._endpoint("existing_password/reset"), data.to_dict())
        return ResetByExistingPasswordResponse.from_dict(response)

    def reset_by_session(self, data: ResetBySessionRequest) -> ResetBySessionResponse:
        response = self._post(self._endpoint("session/reset"), data.to_dict())
        return ResetBySessionResponse.from_dict(response)

    def strength_check(self, data: StrengthCheckRequest) -> StrengthCheckResponse:
        response = self._post(self._endpoint("strength_check"), data.to_dict())
        return StrengthCheckResponse.from_dict(response)

    def migrate(self, data: MigrateRequest) -> MigrateResponse:
        """Import a user whose password hash was produced elsewhere."""
        return MigrateResponse.from_dict(self._post(self._endpoint("migrate"), data.to_dict()))


class AsyncPasswords(_PasswordsBase):
    """Password operations for the async client."""

    def __init__(self, fetch_config: FetchConfig, transport: AsyncTransport) -> None:
        self._fetch_config = fetch_config
        self._transport = transport

    async def _post(self, url: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await async_request(
            self._fetch_config,
            RequestConfig(method="POST", url=url, data=data),
            self._transport,
        )

    async def create(self, data: CreateRequest) -> CreateResponse:
        return CreateResponse.from_dict(await self._post(self.base_path, data.to_dict()))

    async def authenticate(self, data: AuthenticateRequest) -> AuthenticateResponse:
        response = await self._post(self._endpoint("authenticate"), data.to_dict())
        return AuthenticateResponse.from_dict(response)

    async def reset_by_email_start(self, data: ResetByEmailStartRequest) -> ResetByEmailStartResponse:
        response = await self._post(self._endpoint("email/reset/start"), data.to_dict())
        return ResetByEmailStartResponse.from_dict(response)

    async def reset_by_email(
        self, token: str, password: str, data: Optional[ResetByEmailRequest] = None
    ) -> ResetByEmailResponse:
        body = self._reset_by_email_body(token, password, data)
        return ResetByEmailResponse.from_dict(await self._post(self._endpoint("email/reset"), body))

    async def reset_by_existing_password(
        self, data: ResetByExistingPasswordRequest
    ) -> ResetByExistingPasswordResponse:
        response = await self._post(self._endpoint("existing_password/reset"), data.to_dict())
        return ResetByExistingPasswordResponse.from_dict(response)

    async def reset_by_session(self, data: ResetBySessionRequest) -> ResetBySessionResponse:
        response = await self._post(self._endpoint("session/reset"), data.to_dict())
        return ResetBySessionResponse.from_dict(response)

    async def strength_check(self, data: StrengthCheckRequest) -> StrengthCheckResponse:
        response = await self._post(self._endpoint("strength_check"), data.to_dict())
        return StrengthCheckResponse.from_dict(response)

    async def migrate(self, data: MigrateRequest) -> MigrateResponse:
        return MigrateResponse.from_dict(await self._post(self._endpoint("migrate"), data.to_dict()))
