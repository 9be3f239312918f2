"""Issuing and verifying signed bearer tokens."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from evcharge.utils.exceptions import ErrorCode
from evcharge.utils.logger import logger
from evcharge.utils.result import ServiceResult


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried inside a verified token."""
    subject: str
    email: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    HMAC-signed JWTs with a fixed lifetime.

    Nothing is stored server side: a token is valid as long as its
    signature checks out and ``exp`` lies after the service clock, which
    drives both issuance and expiry checks.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in
        self._clock = clock

    def issue(self, user_id: str, email: str) -> str:
        """
        Sign a token for the given user.

        Args:
            user_id: Becomes the ``sub`` claim
            email: Copied into the ``email`` claim

        Returns:
            Encoded JWT
        """
        issued_at = self._clock()
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> ServiceResult[TokenClaims]:
        """
        Validate signature and expiry.

        Args:
            token: Encoded JWT

        Returns:
            Result holding the claims, or INVALID_TOKEN / EXPIRED
        """
        # Time-based claims are checked below against the service clock
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={
                    "require": ["exp", "sub"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid JWT token: {e}")
            return ServiceResult.fail(ErrorCode.INVALID_TOKEN, "Invalid token")

        exp = claims["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            logger.debug("Invalid JWT token: exp is not a timestamp")
            return ServiceResult.fail(ErrorCode.INVALID_TOKEN, "Invalid token")

        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        if expires_at <= self._clock():
            logger.debug("JWT token expired")
            return ServiceResult.fail(ErrorCode.EXPIRED, "Token has expired")

        return ServiceResult.ok(
            TokenClaims(
                subject=str(claims["sub"]),
                email=str(claims.get("email", "")),
                expires_at=expires_at,
            )
        )
