"""
Stytch Auth Python SDK

A Python client for the Stytch authentication API with sync and async
support: password auth, OAuth callback exchange, password resets and
credential migration.
"""

from .client import StytchClient, StytchAsyncClient, create_stytch_client, create_async_stytch_client
from .types import (
    SDK_VERSION,
    ClientConfig,
    FetchConfig,
    RequestConfig,
    OutboundRequest,
    RawResponse,
    Transport,
    AsyncTransport,
)
from .entities import User, Session, Attributes, parse_timestamp
from .factors import (
    AuthenticationFactor,
    EmailFactor,
    PhoneNumberFactor,
    OAuthFactor,
    WebAuthnFactor,
    BiometricFactor,
    AuthenticatorAppFactor,
    RecoveryCodeFactor,
    CryptoWalletFactor,
    PasswordFactor,
    UnknownFactor,
    parse_factor,
)
from .passwords import (
    CreateRequest,
    AuthenticateRequest,
    ResetByEmailStartRequest,
    ResetByEmailRequest,
    ResetByEmailOptions,
    ResetByExistingPasswordRequest,
    ResetBySessionRequest,
    StrengthCheckRequest,
    MigrateRequest,
    MD5MigrateRequest,
    BcryptMigrateRequest,
    Argon2IMigrateRequest,
    Argon2IDMigrateRequest,
    SHA1MigrateRequest,
    ScryptMigrateRequest,
    MD5Config,
    SHA1Config,
    Argon2Config,
    ScryptConfig,
)
from .oauth import OAuthAuthenticateRequest, OAuthAuthenticateResponse
from .errors import (
    ErrorKind,
    StytchAuthError,
    RequestFailure,
    ServiceError,
    ConfigurationError,
    is_stytch_auth_error,
)

__version__ = SDK_VERSION
__all__ = [
    # Clients
    "StytchClient",
    "StytchAsyncClient",
    "create_stytch_client",
    "create_async_stytch_client",
    # Config / pipeline
    "ClientConfig",
    "FetchConfig",
    "RequestConfig",
    "OutboundRequest",
    "RawResponse",
    "Transport",
    "AsyncTransport",
    # Entities
    "User",
    "Session",
    "Attributes",
    "parse_timestamp",
    "AuthenticationFactor",
    "EmailFactor",
    "PhoneNumberFactor",
    "OAuthFactor",
    "WebAuthnFactor",
    "BiometricFactor",
    "AuthenticatorAppFactor",
    "RecoveryCodeFactor",
    "CryptoWalletFactor",
    "PasswordFactor",
    "UnknownFactor",
    "parse_factor",
    # Passwords
    "CreateRequest",
    "AuthenticateRequest",
    "ResetByEmailStartRequest",
    "ResetByEmailRequest",
    "ResetByEmailOptions",
    "ResetByExistingPasswordRequest",
    "ResetBySessionRequest",
    "StrengthCheckRequest",
    "MigrateRequest",
    "MD5MigrateRequest",
    "BcryptMigrateRequest",
    "Argon2IMigrateRequest",
    "Argon2IDMigrateRequest",
    "SHA1MigrateRequest",
    "ScryptMigrateRequest",
    "MD5Config",
    "SHA1Config",
    "Argon2Config",
    "ScryptConfig",
    # OAuth
    "OAuthAuthenticateRequest",
    "OAuthAuthenticateResponse",
    # Errors
    "ErrorKind",
    "StytchAuthError",
    "RequestFailure",
    "ServiceError",
    "ConfigurationError",
    "is_stytch_auth_error",
]
