"""Authentication API endpoints."""
from fastapi import APIRouter, Depends, status

from evcharge.api.dependencies import get_credential_store, get_token_service
from evcharge.auth import Identity, get_current_identity
from evcharge.schemas.auth import CredentialsRequest, LoginResponse, RegisterResponse, UserPublic
from evcharge.services.credential_store import CredentialStore
from evcharge.services.token_service import TokenService
from evcharge.utils.exceptions import raise_for_result
from evcharge.utils.logger import logger, log_context

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: CredentialsRequest,
    store: CredentialStore = Depends(get_credential_store),
) -> RegisterResponse:
    """
    Register a new user.

    Args:
        request: Email and plaintext password
        store: Credential store

    Returns:
        Confirmation message and the created user
    """
    logger.info("Registration request received: " + log_context(email=request.email))
    result = store.register(request.email, request.password)
    raise_for_result(result, "register", email=request.email)

    user = result.data
    return RegisterResponse(
        message="User registered successfully",
        user=UserPublic(id=user.id, email=user.email),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    request: CredentialsRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    """
    Exchange credentials for a bearer token valid for 24 hours.

    Args:
        request: Login credentials
        store: Credential store
        tokens: Token issuer

    Returns:
        Signed token and the user it belongs to
    """
    result = store.verify(request.email, request.password)
    raise_for_result(result, "login", email=request.email)

    user = result.data
    logger.info("User logged in: " + log_context(user_id=user.id))
    return LoginResponse(
        token=tokens.issue(user.id, user.email),
        user=UserPublic(id=user.id, email=user.email),
    )


@router.get("/me", response_model=UserPublic)
async def me(
    identity: Identity = Depends(get_current_identity),
    store: CredentialStore = Depends(get_credential_store),
) -> UserPublic:
    """Return the user behind the bearer token."""
    result = store.get_by_id(identity.user_id)
    raise_for_result(result, "get_current_user", user_id=identity.user_id)

    return UserPublic(id=result.data.id, email=result.data.email)
