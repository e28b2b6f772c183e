"""Shared fixtures: wire payloads."""

from typing import Any, Dict

import pytest


@pytest.fixture
def user_wire() -> Dict[str, Any]:
    """User as the API sends it."""
    return {
        "user_id": "user-test-1",
        "created_at": "2023-05-01T12:30:00Z",
        "status": "active",
        "name": {"first_name": "Ada", "last_name": "Lovelace"},
        "emails": [{"email_id": "email-test-1", "email": "ada@example.com", "verified": True}],
        "phone_numbers": [{"phone_id": "phone-test-1", "phone_number": "+15555550100", "verified": False}],
        "providers": [
            {
                "oauth_user_registration_id": "oauth-user-test-1",
                "provider_subject": "10769150350006150715113082367",
                "provider_type": "Google",
                "profile_picture_url": "https://example.com/ada.png",
                "locale": "en",
            }
        ],
        "webauthn_registrations": [],
        "totps": [{"totp_id": "totp-test-1", "verified": True}],
        "crypto_wallets": [],
        "password": {"password_id": "password-test-1", "requires_reset": False},
        "trusted_metadata": {"plan": "pro"},
        "untrusted_metadata": {},
        "biometric_registrations": [],
    }


@pytest.fixture
def session_wire() -> Dict[str, Any]:
    """Session as the API sends it."""
    return {
        "session_id": "session-test-1",
        "user_id": "user-test-1",
        "started_at": "2023-12-31T23:00:00Z",
        "last_accessed_at": "2023-12-31T23:30:00Z",
        "expires_at": "2024-01-01T00:00:00Z",
        "attributes": {"ip_address": "203.0.113.1", "user_agent": "Mozilla/5.0"},
        "authentication_factors": [
            {
                "delivery_method": "knowledge",
                "type": "password",
                "last_authenticated_at": "2023-12-31T23:00:00Z",
            },
            {
                "delivery_method": "email",
                "type": "magic_link",
                "last_authenticated_at": "2023-12-31T23:00:00Z",
                "email_factor": {"email_id": "email-test-1", "email_address": "ada@example.com"},
            },
        ],
        "custom_claims": {"role": "admin"},
    }

