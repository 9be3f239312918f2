"""Tests for user registration and credential verification."""
import uuid

import pytest

from evcharge.models import User
from evcharge.services import credential_store as credential_store_module
from evcharge.services.credential_store import CredentialStore, normalize_email
from evcharge.utils.exceptions import ErrorCode


@pytest.fixture
def store(db_session):
    return CredentialStore(db_session, bcrypt_rounds=4)


@pytest.mark.parametrize(
    "email,password",
    [
        ("alice@example.com", "secret123"),
        ("  Bob@Example.ORG ", "hunter22"),
        ("c.d+ev@charging.co.uk", "päßwörd-with-unicode"),
    ],
)
def test_register_then_verify_returns_same_user(store, email, password):
    registered = store.register(email, password)
    assert registered.success, registered.message

    verified = store.verify(email, password)
    assert verified.success
    assert verified.data.id == registered.data.id
    assert verified.data.email == normalize_email(email)


def test_register_normalizes_email(store, db_session):
    result = store.register("  Mixed.Case@Example.COM  ", "secret123")

    assert result.data.email == "mixed.case@example.com"
    stored = db_session.query(User).one()
    assert stored.email == "mixed.case@example.com"


def test_password_is_stored_hashed(store, db_session):
    store.register("hash@example.com", "secret123")

    stored = db_session.query(User).one()
    assert stored.password_hash != "secret123"
    assert stored.password_hash.startswith("$2")


@pytest.mark.parametrize(
    "email,password,message",
    [
        ("", "secret123", "Email and password are required"),
        ("user@example.com", None, "Email and password are required"),
        ("not-an-email", "secret123", "Invalid email format"),
        ("user@nodot", "secret123", "Invalid email format"),
        ("a" * 400 + "@b.co", "secret123", "Email cannot exceed 254 characters"),
        ("user@example.com", "12345", "Password must be at least 6 characters long"),
        ("user@example.com", "x" * 73, "Password cannot exceed 72 bytes"),
    ],
)
def test_register_rejects_invalid_input(store, db_session, email, password, message):
    result = store.register(email, password)

    assert not result.success
    assert result.error_code == ErrorCode.INVALID_INPUT
    assert result.message == message
    assert db_session.query(User).count() == 0


def test_register_duplicate_normalized_email_conflicts(store, db_session):
    assert store.register("dup@example.com", "secret123").success

    result = store.register("  DUP@example.com", "another-password")

    assert result.error_code == ErrorCode.CONFLICT
    assert result.message == "Email already registered"
    assert db_session.query(User).count() == 1


def test_concurrent_registration_surfaces_unique_index_as_conflict(store, db_session, monkeypatch):
    """Simulate losing the race: the pre-check sees nothing but the insert collides."""
    assert store.register("race@example.com", "secret123").success
    monkeypatch.setattr(credential_store_module, "get_by_field", lambda *args, **kwargs: None)

    result = store.register("race@example.com", "secret123")

    assert result.error_code == ErrorCode.CONFLICT
    assert db_session.query(User).count() == 1
    # The session is still usable after the rollback
    monkeypatch.undo()
    assert store.verify("race@example.com", "secret123").success


def test_verify_wrong_password_and_unknown_email_fail_identically(store):
    store.register("known@example.com", "secret123")

    wrong_password = store.verify("known@example.com", "wrong-password")
    unknown_email = store.verify("unknown@example.com", "secret123")

    assert wrong_password.error_code == unknown_email.error_code == ErrorCode.UNAUTHORIZED
    assert wrong_password.message == unknown_email.message == "Invalid credentials"
    assert wrong_password.data is None and unknown_email.data is None


def test_unknown_email_still_checks_a_bcrypt_hash(store, monkeypatch):
    checked = []
    real_verify = credential_store_module.verify_password

    def recording_verify(password, password_hash):
        checked.append(password_hash)
        return real_verify(password, password_hash)

    monkeypatch.setattr(credential_store_module, "verify_password", recording_verify)

    result = store.verify("nobody@example.com", "secret123")

    assert result.error_code == ErrorCode.UNAUTHORIZED
    assert len(checked) == 1
    assert checked[0].startswith("$2")


def test_get_by_id_returns_public_fields_only(store):
    registered = store.register("me@example.com", "secret123")

    result = store.get_by_id(registered.data.id)

    assert result.success
    assert result.data.id == registered.data.id
    assert result.data.email == "me@example.com"
    assert not hasattr(result.data, "password_hash")


@pytest.mark.parametrize("user_id", [str(uuid.uuid4()), "not-a-uuid"])
def test_get_by_id_missing_user(store, user_id):
    result = store.get_by_id(user_id)

    assert result.error_code == ErrorCode.NOT_FOUND
