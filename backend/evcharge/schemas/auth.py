"""Schemas for registration, login and identity."""
from typing import Optional
from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    """Request body for /api/auth/register and /api/auth/login."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    """User as exposed over the API; never carries the password hash."""
    id: str
    email: str


class RegisterResponse(BaseModel):
    message: str
    user: UserPublic


class LoginResponse(BaseModel):
    token: str
    user: UserPublic
