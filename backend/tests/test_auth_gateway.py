"""Tests for resolving Authorization headers to identities."""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from evcharge.auth import authenticate
from evcharge.services.token_service import TokenService
from evcharge.utils.exceptions import ErrorCode

SECRET = "gateway-secret"
USER_ID = "0b6f4c1e-8d2a-4f3b-9c7e-5a1d2e3f4b6c"


@pytest.fixture
def tokens():
    return TokenService(SECRET)


def test_valid_bearer_token_yields_identity(tokens):
    token = tokens.issue(USER_ID, "driver@example.com")

    result = authenticate(f"Bearer {token}", tokens)

    assert result.success
    assert result.data.user_id == USER_ID
    assert result.data.email == "driver@example.com"


def test_scheme_is_case_insensitive(tokens):
    token = tokens.issue(USER_ID, "driver@example.com")

    assert authenticate(f"bearer {token}", tokens).success


@pytest.mark.parametrize("header", [None, "", "   ", "Bearer", "Bearer ", "Basic abc123", "Bearer a b"])
def test_missing_or_malformed_header_is_unauthenticated_without_verifying(header):
    token_service = MagicMock(spec=TokenService)

    result = authenticate(header, token_service)

    assert result.error_code == ErrorCode.UNAUTHENTICATED
    token_service.verify.assert_not_called()


def test_invalid_token_is_forbidden(tokens):
    result = authenticate("Bearer not-a-real-token", tokens)

    assert result.error_code == ErrorCode.FORBIDDEN
    assert result.message == "Invalid or expired token"


def test_expired_token_is_forbidden():
    stale = TokenService(SECRET, clock=lambda: datetime.now(timezone.utc) - timedelta(days=2))
    token = stale.issue(USER_ID, "driver@example.com")

    result = authenticate(f"Bearer {token}", TokenService(SECRET))

    assert result.error_code == ErrorCode.FORBIDDEN


@pytest.mark.parametrize("subject", ["not-a-uuid", "undefined", "12345"])
def test_signed_token_with_non_identifier_subject_is_forbidden(tokens, subject):
    token = tokens.issue(subject, "driver@example.com")

    result = authenticate(f"Bearer {token}", tokens)

    assert result.error_code == ErrorCode.FORBIDDEN
    assert result.message == "Invalid or expired token"
