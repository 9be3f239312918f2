"""Bearer token authentication utilities."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fastapi import Header, Request

from evcharge.services.token_service import TokenService
from evcharge.utils.db import parse_identifier
from evcharge.utils.exceptions import ErrorCode, raise_for_result
from evcharge.utils.result import ServiceResult

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class Identity:
    """Caller identity, recomputed from the verified token on every request."""
    user_id: str
    email: str
    expires_at: datetime


def authenticate(raw_header: Optional[str], token_service: TokenService) -> ServiceResult[Identity]:
    """
    Resolve an ``Authorization`` header value to an identity.

    A missing or malformed header fails with UNAUTHENTICATED without
    touching the token service; a token that does not verify, or whose
    subject is not a user identifier, fails with FORBIDDEN.

    Args:
        raw_header: Value of the Authorization header, if any
        token_service: Verifier for the bearer token

    Returns:
        Result holding the caller's identity
    """
    if not raw_header or not raw_header.strip():
        return ServiceResult.fail(ErrorCode.UNAUTHENTICATED, "Authorization header missing")

    parts = raw_header.split()
    if parts[0].lower() != BEARER_SCHEME:
        return ServiceResult.fail(ErrorCode.UNAUTHENTICATED, "Authorization header must use the Bearer scheme")
    if len(parts) != 2:
        return ServiceResult.fail(ErrorCode.UNAUTHENTICATED, "Token missing")

    verified = token_service.verify(parts[1])
    if not verified.success:
        return ServiceResult.fail(ErrorCode.FORBIDDEN, "Invalid or expired token")

    claims = verified.data
    if parse_identifier(claims.subject) is None:
        return ServiceResult.fail(ErrorCode.FORBIDDEN, "Invalid or expired token")

    return ServiceResult.ok(Identity(user_id=claims.subject, email=claims.email, expires_at=claims.expires_at))


def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(None, description="Bearer token"),
) -> Identity:
    """
    Dependency that requires a valid bearer token.

    The identity is also stored on ``request.state.identity`` for
    anything further down the request.

    Raises:
        APIError: 401 for missing credentials, 403 for invalid ones
    """
    result = authenticate(authorization, request.app.state.token_service)
    raise_for_result(result, "authenticate", path=request.url.path)

    request.state.identity = result.data
    return result.data
