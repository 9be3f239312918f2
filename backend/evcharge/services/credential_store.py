"""User registration and credential verification."""
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from evcharge.constants import EMAIL_MAX_LENGTH, PASSWORD_MAX_BYTES, PASSWORD_MIN_LENGTH
from evcharge.models import User
from evcharge.utils.db import get_by_field, get_by_id
from evcharge.utils.exceptions import ErrorCode
from evcharge.utils.hashing import hash_password, verify_password
from evcharge.utils.logger import logger, log_context
from evcharge.utils.result import ServiceResult

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class UserRecord:
    """Public view of a user; the password hash never leaves the store."""
    id: str
    email: str


@lru_cache()
def _placeholder_hash(rounds: int) -> str:
    """Hash checked for unknown emails so both failure paths pay for bcrypt."""
    return hash_password("placeholder-password", rounds)


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address; this is the uniqueness key."""
    return email.strip().lower()


class CredentialStore:
    """Persists user identities and checks passwords against their bcrypt hashes."""

    def __init__(self, db: Session, bcrypt_rounds: int = 10):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, email: Optional[str], password: Optional[str]) -> ServiceResult[UserRecord]:
        """
        Create a user with a salted password hash.

        The pre-insert lookup gives a friendly answer in the common case;
        the unique index on ``users.email`` is what actually prevents two
        concurrent registrations from both succeeding.

        Args:
            email: Raw email from the client
            password: Plaintext password, hashed before it touches storage

        Returns:
            Result holding the new user, or INVALID_INPUT / CONFLICT
        """
        if not email or not password:
            return ServiceResult.fail(ErrorCode.INVALID_INPUT, "Email and password are required")

        normalized = normalize_email(email)
        if len(normalized) > EMAIL_MAX_LENGTH:
            return ServiceResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Email cannot exceed {EMAIL_MAX_LENGTH} characters",
            )
        if not EMAIL_PATTERN.match(normalized):
            return ServiceResult.fail(ErrorCode.INVALID_INPUT, "Invalid email format")
        if len(password) < PASSWORD_MIN_LENGTH:
            return ServiceResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
            )
        if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            return ServiceResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Password cannot exceed {PASSWORD_MAX_BYTES} bytes",
            )

        if get_by_field(self.db, User, "email", normalized) is not None:
            logger.info("User already exists: " + log_context(email=normalized))
            return ServiceResult.fail(ErrorCode.CONFLICT, "Email already registered")

        user = User(email=normalized, password_hash=hash_password(password, self.bcrypt_rounds))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost the race against a concurrent registration of the same email
            self.db.rollback()
            logger.info("Duplicate registration rejected by unique index: " + log_context(email=normalized))
            return ServiceResult.fail(ErrorCode.CONFLICT, "Email already registered")
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)

        logger.info("User created: " + log_context(user_id=user.id, email=user.email))
        return ServiceResult.ok(UserRecord(id=str(user.id), email=user.email))

    def verify(self, email: Optional[str], password: Optional[str]) -> ServiceResult[UserRecord]:
        """
        Check an email/password pair.

        Unknown emails and wrong passwords fail with the same UNAUTHORIZED
        result so callers cannot tell which addresses are registered.
        """
        if not email or not password:
            return ServiceResult.fail(ErrorCode.INVALID_INPUT, "Email and password are required")

        user = get_by_field(self.db, User, "email", normalize_email(email))
        if user is None:
            verify_password(password, _placeholder_hash(self.bcrypt_rounds))
            return ServiceResult.fail(ErrorCode.UNAUTHORIZED, INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            return ServiceResult.fail(ErrorCode.UNAUTHORIZED, INVALID_CREDENTIALS)

        return ServiceResult.ok(UserRecord(id=str(user.id), email=user.email))

    def get_by_id(self, user_id: str | UUID) -> ServiceResult[UserRecord]:
        """Look up a user by identifier without exposing the hash."""
        result = get_by_id(self.db, User, str(user_id), error_message="User not found")
        if not result.success:
            # A token subject that is not a UUID cannot match any user
            return ServiceResult.fail(ErrorCode.NOT_FOUND, "User not found")

        user = result.data
        return ServiceResult.ok(UserRecord(id=str(user.id), email=user.email))
