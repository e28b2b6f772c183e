"""
Tests for entity normalization

Timestamp coercion on users and sessions, authentication factor narrowing,
and preservation of fields the SDK does not transform.
"""

from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from stytch_auth.entities import Password, Session, User, parse_timestamp
from stytch_auth.factors import (
    FACTOR_VARIANTS,
    EmailFactor,
    OAuthFactor,
    PasswordFactor,
    PhoneNumberFactor,
    UnknownFactor,
    WebAuthnFactor,
    parse_factor,
)


def _payload_for(delivery_method: str) -> Dict[str, Any]:
    """A plausible nested payload for every known delivery method."""
    payloads = {
        "email_factor": {"email_id": "email-1", "email_address": "a@example.com"},
        "phone_number_factor": {"phone_id": "phone-1", "phone_number": "+15555550100"},
        "webauthn_factor": {
            "webauthn_registration_id": "webauthn-1",
            "domain": "example.com",
            "user_agent": "Mozilla/5.0",
        },
        "biometric_factor": {"biometric_registration_id": "biometric-1"},
        "authenticator_app_factor": {"totp_id": "totp-1"},
        "recovery_code_factor": {"totp_recovery_code_id": "recovery-1"},
        "crypto_wallet_factor": {
            "crypto_wallet_id": "wallet-1",
            "crypto_wallet_address": "0x6df2dB4Fb3DA35d241901Bd53367770BF03123f1",
            "crypto_wallet_type": "ethereum",
        },
    }
    key = FACTOR_VARIANTS[delivery_method].payload_key
    if key in payloads:
        return payloads[key]
    return {"id": "oauth-1", "email_id": "email-1", "provider_subject": "subject-1"}


# =============================================================================
# Timestamps
# =============================================================================

class TestTimestamps:
    """Tests for ISO-8601 coercion."""

    def test_zulu_suffix_is_utc(self):
        assert parse_timestamp("2024-01-01T00:00:00Z") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_offset_is_preserved(self):
        parsed = parse_timestamp("2024-01-01T02:00:00+02:00")
        assert parsed == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_fractional_seconds(self):
        parsed = parse_timestamp("2024-01-01T00:00:00.123456Z")
        assert parsed.microsecond == 123456

    @pytest.mark.parametrize(
        "value, microsecond",
        [
            ("2024-01-01T00:00:00.1Z", 100000),
            ("2024-01-01T00:00:00.12Z", 120000),
            ("2024-01-01T00:00:00.123456789Z", 123456),
            ("2024-01-01T00:00:00.5+02:00", 500000),
        ],
    )
    def test_any_fraction_length(self, value: str, microsecond: int):
        assert parse_timestamp(value).microsecond == microsecond

    def test_malformed_timestamp_propagates(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


# =============================================================================
# Users and Sessions
# =============================================================================

class TestUser:
    """Tests for user decoding."""

    def test_created_at_is_datetime(self, user_wire: Dict[str, Any]):
        user = User.from_dict(user_wire)

        assert isinstance(user.created_at, datetime)
        assert user.created_at == datetime(2023, 5, 1, 12, 30, tzinfo=timezone.utc)

    def test_collections_are_decoded(self, user_wire: Dict[str, Any]):
        user = User.from_dict(user_wire)

        assert user.emails[0].email == "ada@example.com"
        assert user.emails[0].verified is True
        assert user.phone_numbers[0].phone_id == "phone-test-1"
        assert user.providers[0].provider_type == "Google"
        assert user.totps[0].totp_id == "totp-test-1"
        assert user.password is not None
        assert user.password.password_id == "password-test-1"
        assert user.name.first_name == "Ada"
        assert user.trusted_metadata == {"plan": "pro"}

    def test_unmodelled_fields_are_kept(self, user_wire: Dict[str, Any]):
        user = User.from_dict(user_wire)
        assert user.extras == {"biometric_registrations": []}

    def test_round_trip_preserves_wire_fields(self, user_wire: Dict[str, Any]):
        assert User.from_dict(user_wire).to_dict() == user_wire

    def test_explicit_nulls_survive_round_trip(self, user_wire: Dict[str, Any]):
        user_wire["password"] = None
        user_wire["name"]["middle_name"] = None
        user_wire["trusted_metadata"] = None

        user = User.from_dict(user_wire)

        assert user.password is None
        assert user.to_dict() == user_wire

    def test_null_nested_object_stays_null(self, user_wire: Dict[str, Any]):
        user_wire["name"] = None
        assert User.from_dict(user_wire).to_dict() == user_wire

    def test_reassigned_null_field_is_emitted(self, user_wire: Dict[str, Any]):
        user_wire["password"] = None
        user = User.from_dict(user_wire)

        user.password = Password(password_id="password-test-2")

        assert user.to_dict()["password"] == {"password_id": "password-test-2", "requires_reset": False}

    def test_absent_optional_fields_stay_absent(self, user_wire: Dict[str, Any]):
        del user_wire["password"]
        del user_wire["trusted_metadata"]
        assert User.from_dict(user_wire).to_dict() == user_wire

    def test_malformed_created_at_propagates(self, user_wire: Dict[str, Any]):
        user_wire["created_at"] = "not-a-date"
        with pytest.raises(ValueError):
            User.from_dict(user_wire)


class TestSession:
    """Tests for session decoding."""

    def test_expires_at_is_typed_instant(self, session_wire: Dict[str, Any]):
        session = Session.from_dict(session_wire)

        assert isinstance(session.expires_at, datetime)
        assert session.expires_at == datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert isinstance(session.started_at, datetime)
        assert isinstance(session.last_accessed_at, datetime)

    def test_factors_are_narrowed(self, session_wire: Dict[str, Any]):
        session = Session.from_dict(session_wire)

        password_factor, email_factor = session.authentication_factors
        assert isinstance(password_factor, PasswordFactor)
        assert isinstance(email_factor, EmailFactor)
        assert email_factor.payload.email_address == "ada@example.com"

    def test_attributes_and_claims(self, session_wire: Dict[str, Any]):
        session = Session.from_dict(session_wire)

        assert session.attributes.ip_address == "203.0.113.1"
        assert session.custom_claims == {"role": "admin"}

    def test_round_trip_preserves_wire_fields(self, session_wire: Dict[str, Any]):
        assert Session.from_dict(session_wire).to_dict() == session_wire

    def test_null_custom_claims_survive_round_trip(self, session_wire: Dict[str, Any]):
        session_wire["custom_claims"] = None
        session_wire["attributes"] = None
        assert Session.from_dict(session_wire).to_dict() == session_wire


# =============================================================================
# Authentication Factors
# =============================================================================

class TestFactors:
    """Tests for authentication factor narrowing."""

    def test_every_service_delivery_method_is_registered(self):
        assert len(FACTOR_VARIANTS) == 27
        assert {"email", "embedded", "sms", "whatsapp", "knowledge", "oauth_figma"} <= set(FACTOR_VARIANTS)

    @pytest.mark.parametrize(
        "delivery_method",
        sorted(m for m, v in FACTOR_VARIANTS.items() if v.payload_key is not None),
    )
    def test_envelope_and_payload_are_accessible(self, delivery_method: str):
        variant = FACTOR_VARIANTS[delivery_method]
        payload = _payload_for(delivery_method)
        wire = {
            "delivery_method": delivery_method,
            "type": "some_type",
            "last_authenticated_at": "2024-01-01T00:00:00Z",
            variant.payload_key: payload,
        }

        factor = parse_factor(wire)

        assert isinstance(factor, variant.factor_cls)
        assert factor.delivery_method == delivery_method
        assert factor.type == "some_type"
        assert factor.last_authenticated_at == "2024-01-01T00:00:00Z"
        assert factor.payload_key == variant.payload_key
        assert factor.payload.to_dict() == payload
        assert factor.to_dict() == wire

    def test_oauth_payload_key_follows_provider(self):
        factor = parse_factor({
            "delivery_method": "oauth_google",
            "type": "oauth",
            "last_authenticated_at": "2024-01-01T00:00:00Z",
            "google_oauth_factor": {"id": "g1", "email_id": "e1", "provider_subject": "s1"},
        })

        assert isinstance(factor, OAuthFactor)
        assert factor.provider == "google"
        assert factor.payload.provider_subject == "s1"

    def test_oauth_without_email(self):
        factor = parse_factor({
            "delivery_method": "oauth_twitter",
            "type": "oauth",
            "last_authenticated_at": "2024-01-01T00:00:00Z",
            "twitter_oauth_factor": {"id": "t1", "provider_subject": "s1"},
        })

        assert isinstance(factor, OAuthFactor)
        assert factor.payload.email_id is None
        assert "email_id" not in factor.to_dict()["twitter_oauth_factor"]

    def test_phone_variants_share_payload(self):
        for delivery_method in ("sms", "whatsapp"):
            factor = parse_factor({
                "delivery_method": delivery_method,
                "type": "otp",
                "last_authenticated_at": "",
                "phone_number_factor": {"phone_id": "p1", "phone_number": "+15555550100"},
            })
            assert isinstance(factor, PhoneNumberFactor)
            assert factor.payload.phone_id == "p1"

    def test_webauthn_payload(self):
        factor = parse_factor({
            "delivery_method": "webauthn_registration",
            "type": "webauthn",
            "last_authenticated_at": "",
            "webauthn_factor": _payload_for("webauthn_registration"),
        })
        assert isinstance(factor, WebAuthnFactor)
        assert factor.payload.domain == "example.com"

    def test_knowledge_factor_has_no_payload(self):
        factor = parse_factor({
            "delivery_method": "knowledge",
            "type": "password",
            "last_authenticated_at": "2024-01-01T00:00:00Z",
        })
        assert isinstance(factor, PasswordFactor)
        assert factor.payload_key is None

    def test_unknown_delivery_method_is_not_an_error(self):
        wire = {
            "delivery_method": "oauth_newprovider",
            "type": "oauth",
            "last_authenticated_at": "2024-01-01T00:00:00Z",
            "newprovider_oauth_factor": {"id": "n1", "provider_subject": "s1"},
        }

        factor = parse_factor(wire)

        assert isinstance(factor, UnknownFactor)
        assert factor.delivery_method == "oauth_newprovider"
        assert factor.type == "oauth"
        assert factor.residual == {"newprovider_oauth_factor": {"id": "n1", "provider_subject": "s1"}}
        assert factor.to_dict() == wire

    def test_narrowing_trusts_the_service(self):
        """A payload missing fields is exposed as-is, not rejected."""
        factor = parse_factor({
            "delivery_method": "email",
            "type": "magic_link",
            "last_authenticated_at": "",
            "email_factor": {"email_id": "e1"},
        })
        assert isinstance(factor, EmailFactor)
        assert factor.payload.email_id == "e1"
        assert factor.payload.email_address == ""

    def test_python_side_names_are_ordinary_wire_keys(self):
        wire = {
            "delivery_method": "email",
            "type": "magic_link",
            "last_authenticated_at": "2024-01-01T00:00:00Z",
            "email_factor": {"email_id": "e1", "email_address": "a@example.com", "extras": {"k": 1}},
            "payload": "opaque",
        }

        factor = parse_factor(wire)

        assert factor.payload.extras == {"extras": {"k": 1}}
        assert factor.extras == {"payload": "opaque"}
        assert factor.to_dict() == wire

    def test_null_payload_and_envelope_survive_round_trip(self):
        wire = {
            "delivery_method": "sms",
            "type": "otp",
            "last_authenticated_at": None,
            "phone_number_factor": None,
        }
        assert parse_factor(wire).to_dict() == wire
