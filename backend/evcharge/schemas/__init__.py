"""Pydantic schemas for request/response validation."""
from evcharge.schemas.auth import CredentialsRequest, LoginResponse, RegisterResponse, UserPublic
from evcharge.schemas.station import (
    DeleteStationResponse,
    LocationIn,
    StationFields,
    StationFilters,
    StationResponse,
)

__all__ = [
    "CredentialsRequest",
    "LoginResponse",
    "RegisterResponse",
    "UserPublic",
    "DeleteStationResponse",
    "LocationIn",
    "StationFields",
    "StationFilters",
    "StationResponse",
]
