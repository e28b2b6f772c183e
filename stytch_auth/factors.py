"""
Authentication factors attached to a session.

The service tags each factor with ``delivery_method`` and nests the
variant-specific fields under a key derived from it (``email_factor``,
``google_oauth_factor``, ``webauthn_factor`` ...). ``parse_factor`` narrows
once, at decode time, to one of the variant classes below. Delivery methods
this SDK does not know yet decode to ``UnknownFactor`` with every other wire
field kept in ``residual``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, NamedTuple, Optional, Type, Union

from ._wire import dump, null_keys, unknown_fields


ENVELOPE_FIELDS = ("delivery_method", "type", "last_authenticated_at")

OAUTH_PROVIDERS = (
    "google",
    "microsoft",
    "apple",
    "github",
    "gitlab",
    "facebook",
    "discord",
    "slack",
    "amazon",
    "bitbucket",
    "linkedin",
    "coinbase",
    "twitch",
    "twitter",
    "tiktok",
    "snapchat",
    "figma",
)


# =============================================================================
# Payloads
# =============================================================================

@dataclass
class EmailFactorPayload:
    email_id: str
    email_address: str
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmailFactorPayload":
        return cls(
            email_id=data.get("email_id", ""),
            email_address=data.get("email_address", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class PhoneNumberFactorPayload:
    phone_id: str
    phone_number: str
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhoneNumberFactorPayload":
        return cls(
            phone_id=data.get("phone_id", ""),
            phone_number=data.get("phone_number", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class OAuthFactorPayload:
    """Shared by every OAuth provider. Twitter, TikTok and Snapchat send no ``email_id``."""

    id: str
    provider_subject: str
    email_id: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuthFactorPayload":
        return cls(
            id=data.get("id", ""),
            provider_subject=data.get("provider_subject", ""),
            email_id=data.get("email_id"),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class WebAuthnFactorPayload:
    webauthn_registration_id: str
    domain: str
    user_agent: str
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebAuthnFactorPayload":
        return cls(
            webauthn_registration_id=data.get("webauthn_registration_id", ""),
            domain=data.get("domain", ""),
            user_agent=data.get("user_agent", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class BiometricFactorPayload:
    biometric_registration_id: str
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BiometricFactorPayload":
        return cls(
            biometric_registration_id=data.get("biometric_registration_id", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class AuthenticatorAppFactorPayload:
    totp_id: str
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthenticatorAppFactorPayload":
        return cls(
            totp_id=data.get("totp_id", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class RecoveryCodeFactorPayload:
    totp_recovery_code_id: str
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecoveryCodeFactorPayload":
        return cls(
            totp_recovery_code_id=data.get("totp_recovery_code_id", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


@dataclass
class CryptoWalletFactorPayload:
    crypto_wallet_id: str
    crypto_wallet_address: str
    crypto_wallet_type: str
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CryptoWalletFactorPayload":
        return cls(
            crypto_wallet_id=data.get("crypto_wallet_id", ""),
            crypto_wallet_address=data.get("crypto_wallet_address", ""),
            crypto_wallet_type=data.get("crypto_wallet_type", ""),
            extras=unknown_fields(cls, data),
            wire_nulls=null_keys(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dump(self)


# =============================================================================
# Variants
# =============================================================================

@dataclass
class _FactorEnvelope:
    delivery_method: str
    type: str
    last_authenticated_at: str

    @property
    def payload_key(self) -> Optional[str]:
        """Wire key holding the variant payload, if the variant has one."""
        variant = FACTOR_VARIANTS.get(self.delivery_method)
        return variant.payload_key if variant else None

    def to_dict(self) -> Dict[str, Any]:
        payload = getattr(self, "payload", None)
        if payload is None:
            return dump(self)
        if self.payload_key in getattr(self, "wire_nulls", ()):
            return dump(self, payload=None, **{self.payload_key: None})
        return dump(self, payload=None, **{self.payload_key: payload.to_dict()})


@dataclass
class EmailFactor(_FactorEnvelope):
    payload: EmailFactorPayload
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)


@dataclass
class PhoneNumberFactor(_FactorEnvelope):
    payload: PhoneNumberFactorPayload
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)


@dataclass
class OAuthFactor(_FactorEnvelope):
    payload: OAuthFactorPayload
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    @property
    def provider(self) -> str:
        return self.delivery_method[len("oauth_"):]


@dataclass
class WebAuthnFactor(_FactorEnvelope):
    payload: WebAuthnFactorPayload
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)


@dataclass
class BiometricFactor(_FactorEnvelope):
    payload: BiometricFactorPayload
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)


@dataclass
class AuthenticatorAppFactor(_FactorEnvelope):
    payload: AuthenticatorAppFactorPayload
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)


@dataclass
class RecoveryCodeFactor(_FactorEnvelope):
    payload: RecoveryCodeFactorPayload
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)


@dataclass
class CryptoWalletFactor(_FactorEnvelope):
    payload: CryptoWalletFactorPayload
    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)


@dataclass
class PasswordFactor(_FactorEnvelope):
    """``knowledge`` factor; carries no payload."""

    extras: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)


@dataclass
class UnknownFactor(_FactorEnvelope):
    """A delivery method added on the service side after this release."""

    residual: Dict[str, Any] = field(default_factory=dict)
    wire_nulls: FrozenSet[str] = field(default_factory=frozenset, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return dump(self, residual=None, **self.residual)


AuthenticationFactor = Union[
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
]


class FactorVariant(NamedTuple):
    payload_key: Optional[str]
    factor_cls: Type[_FactorEnvelope]
    payload_cls: Optional[Type[Any]]


FACTOR_VARIANTS: Dict[str, FactorVariant] = {
    "email": FactorVariant("email_factor", EmailFactor, EmailFactorPayload),
    "embedded": FactorVariant("email_factor", EmailFactor, EmailFactorPayload),
    "sms": FactorVariant("phone_number_factor", PhoneNumberFactor, PhoneNumberFactorPayload),
    "whatsapp": FactorVariant("phone_number_factor", PhoneNumberFactor, PhoneNumberFactorPayload),
    "webauthn_registration": FactorVariant("webauthn_factor", WebAuthnFactor, WebAuthnFactorPayload),
    "biometric": FactorVariant("biometric_factor", BiometricFactor, BiometricFactorPayload),
    "authenticator_app": FactorVariant(
        "authenticator_app_factor", AuthenticatorAppFactor, AuthenticatorAppFactorPayload
    ),
    "recovery_code": FactorVariant("recovery_code_factor", RecoveryCodeFactor, RecoveryCodeFactorPayload),
    "crypto_wallet": FactorVariant("crypto_wallet_factor", CryptoWalletFactor, CryptoWalletFactorPayload),
    "knowledge": FactorVariant(None, PasswordFactor, None),
}
FACTOR_VARIANTS.update({
    f"oauth_{provider}": FactorVariant(f"{provider}_oauth_factor", OAuthFactor, OAuthFactorPayload)
    for provider in OAUTH_PROVIDERS
})


def parse_factor(data: Dict[str, Any]) -> AuthenticationFactor:
    """Narrow a wire factor to its variant by ``delivery_method``."""
    delivery_method = data.get("delivery_method", "")
    envelope = {
        "delivery_method": delivery_method,
        "type": data.get("type", ""),
        "last_authenticated_at": data.get("last_authenticated_at", ""),
    }
    variant = FACTOR_VARIANTS.get(delivery_method)

    if variant is None:
        residual = {k: v for k, v in data.items() if k not in ENVELOPE_FIELDS}
        return UnknownFactor(residual=residual, wire_nulls=null_keys(data), **envelope)

    if variant.payload_key is None:
        return PasswordFactor(
            extras=unknown_fields(PasswordFactor, data),
            wire_nulls=null_keys(data),
            **envelope,
        )

    return variant.factor_cls(
        payload=variant.payload_cls.from_dict(data.get(variant.payload_key) or {}),
        extras=unknown_fields(variant.factor_cls, data, also_known=(variant.payload_key,)),
        wire_nulls=null_keys(data),
        **envelope,
    )
