"""Dependency providers shared by the API routers."""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from evcharge.config import Settings
from evcharge.database import get_db
from evcharge.services.credential_store import CredentialStore
from evcharge.services.station_repository import StationRepository
from evcharge.services.token_service import TokenService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_credential_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> CredentialStore:
    return CredentialStore(db, bcrypt_rounds=settings.bcrypt_rounds)


def get_station_repository(db: Session = Depends(get_db)) -> StationRepository:
    return StationRepository(db)
