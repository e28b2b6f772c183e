"""
Stytch Auth SDK entities

Users and sessions as returned by the API. Timestamp fields arrive as
ISO-8601 strings and are exposed as timezone-aware ``datetime`` objects;
every other wire field passes through, including fields this SDK does not
model (kept in ``extras``).
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional

from ._wire import dump, null_keys, unknown_fields
from .factors import AuthenticationFactor, parse_factor


# Fractional seconds followed by a UTC offset or the end of the string
_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:\d{2}$|$)")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp such as ``2024-01-01T00:00:00Z``.

    Malformed input raises ``ValueError``; the service is trusted to send
    well-formed timestamps.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    # fromisoformat only takes 3 or 6 fractional digits before 3.11
    value = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Inverse of ``parse_timestamp`` for UTC instants."""
    return value.isoformat().replace("+00:00", "Z")


@dataclass
class Attributes:
    """Request attributes recorded with a session."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attributes":
        return cls(
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class Name:
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Name":
        return cls(
            first_name=data.get("first_name"),
            middle_name=data.get("middle_name"),
            last_name=data.get("last_name"),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class Email:
    email_id: str
    email: str
    verified: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Email":
        return cls(
            email_id=data["email_id"],
            email=data.get("email", ""),
            verified=data.get("verified", False),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class PhoneNumber:
    phone_id: str
    phone_number: str
    verified: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhoneNumber":
        return cls(
            phone_id=data["phone_id"],
            phone_number=data.get("phone_number", ""),
            verified=data.get("verified", False),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class WebAuthnRegistration:
    webauthn_registration_id: str
    domain: str
    user_agent: str
    verified: bool
    authenticator_type: str
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebAuthnRegistration":
        return cls(
            webauthn_registration_id=data["webauthn_registration_id"],
            domain=data.get("domain", ""),
            user_agent=data.get("user_agent", ""),
            verified=data.get("verified", False),
            authenticator_type=data.get("authenticator_type", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class TOTP:
    totp_id: str
    verified: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TOTP":
        return cls(
            totp_id=data["totp_id"],
            verified=data.get("verified", False),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class Password:
    password_id: str
    requires_reset: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Password":
        return cls(
            password_id=data["password_id"],
            requires_reset=data.get("requires_reset", False),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class CryptoWallet:
    crypto_wallet_id: str
    crypto_wallet_address: str
    crypto_wallet_type: str
    verified: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CryptoWallet":
        return cls(
            crypto_wallet_id=data["crypto_wallet_id"],
            crypto_wallet_address=data.get("crypto_wallet_address", ""),
            crypto_wallet_type=data.get("crypto_wallet_type", ""),
            verified=data.get("verified", False),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class OAuthProvider:
    """An OAuth identity linked to the user."""

    oauth_user_registration_id: str
    provider_subject: str
    provider_type: str
    profile_picture_url: str = ""
    locale: str = ""
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuthProvider":
        return cls(
            oauth_user_registration_id=data["oauth_user_registration_id"],
            provider_subject=data.get("provider_subject", ""),
            provider_type=data.get("provider_type", ""),
            profile_picture_url=data.get("profile_picture_url", ""),
            locale=data.get("locale", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class User:
    """User data returned from API."""

    user_id: str
    created_at: datetime
    status: str
    name: Name = field(default_factory=Name)
    emails: List[Email] = field(default_factory=list)
    phone_numbers: List[PhoneNumber] = field(default_factory=list)
    providers: List[OAuthProvider] = field(default_factory=list)
    webauthn_registrations: List[WebAuthnRegistration] = field(default_factory=list)
    totps: List[TOTP] = field(default_factory=list)
    crypto_wallets: List[CryptoWallet] = field(default_factory=list)
    password: Optional[Password] = None
    trusted_metadata: Optional[Dict[str, Any]] = None
    untrusted_metadata: Optional[Dict[str, Any]] = None
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create from dictionary, coercing ``created_at``."""
        name_data = data.get("name")
        password_data = data.get("password")
        return cls(
            user_id=data["user_id"],
            created_at=parse_timestamp(data["created_at"]),
            status=data.get("status", ""),
            name=Name.from_dict(name_data) if name_data else Name(),
            emails=[Email.from_dict(e) for e in data.get("emails") or []],
            phone_numbers=[PhoneNumber.from_dict(p) for p in data.get("phone_numbers") or []],
            providers=[OAuthProvider.from_dict(p) for p in data.get("providers") or []],
            webauthn_registrations=[
                WebAuthnRegistration.from_dict(w) for w in data.get("webauthn_registrations") or []
            ],
            totps=[TOTP.from_dict(t) for t in data.get("totps") or []],
            crypto_wallets=[CryptoWallet.from_dict(c) for c in data.get("crypto_wallets") or []],
            password=Password.from_dict(password_data) if password_data else None,
            trusted_metadata=data.get("trusted_metadata"),
            untrusted_metadata=data.get("untrusted_metadata"),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the wire shape."""
        return dump(
            self,
            created_at=format_timestamp(self.created_at),
            name=self.name.to_dict(),
            emails=[e.to_dict() for e in self.emails],
            phone_numbers=[p.to_dict() for p in self.phone_numbers],
            providers=[p.to_dict() for p in self.providers],
            webauthn_registrations=[w.to_dict() for w in self.webauthn_registrations],
            totps=[t.to_dict() for t in self.totps],
            crypto_wallets=[c.to_dict() for c in self.crypto_wallets],
            password=self.password.to_dict() if self.password else None,
        )


@dataclass
class Session:
    """Session data returned from API."""

    session_id: str
    user_id: str
    started_at: datetime
    last_accessed_at: datetime
    expires_at: datetime
    attributes: Attributes = field(default_factory=Attributes)
    authentication_factors: List[AuthenticationFactor] = field(default_factory=list)
    custom_claims: Optional[Dict[str, Any]] = None
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        """Create from dictionary, coercing timestamps and narrowing factors."""
        attributes_data = data.get("attributes")
        return cls(
            session_id=data["session_id"],
            user_id=data.get("user_id", ""),
            started_at=parse_timestamp(data["started_at"]),
            last_accessed_at=parse_timestamp(data["last_accessed_at"]),
            expires_at=parse_timestamp(data["expires_at"]),
            attributes=Attributes.from_dict(attributes_data) if attributes_data else Attributes(),
            authentication_factors=[
                parse_factor(f) for f in data.get("authentication_factors") or []
            ],
            custom_claims=data.get("custom_claims"),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the wire shape."""
        return dump(
            self,
            started_at=format_timestamp(self.started_at),
            last_accessed_at=format_timestamp(self.last_accessed_at),
            expires_at=format_timestamp(self.expires_at),
            attributes=self.attributes.to_dict(),
            authentication_factors=[f.to_dict() for f in self.authentication_factors],
        )


def parse_user(data: Optional[Dict[str, Any]]) -> Optional[User]:
    """Normalize an optional wire user."""
    return User.from_dict(data) if data else None


def parse_session(data: Optional[Dict[str, Any]]) -> Optional[Session]:
    """Normalize an optional wire session."""
    return Session.from_dict(data) if data else None
