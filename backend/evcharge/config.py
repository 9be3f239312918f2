"""Application configuration using Pydantic settings."""
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_connect_timeout_seconds: int = 10
    db_socket_timeout_seconds: int = 30

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=3000, validation_alias=AliasChoices("api_port", "port"))
    environment: str = "development"

    # Security
    secret_key: str = Field(validation_alias=AliasChoices("secret_key", "jwt_secret"))
    jwt_algorithm: str = "HS256"
    access_token_expire_hours: int = 24
    bcrypt_rounds: int = 10

    # Stations
    restrict_station_mutation_to_owner: bool = False
    enable_seed_endpoint: bool = False

    # CORS
    allowed_origins: str = "*"

    @field_validator("secret_key")
    @classmethod
    def secret_key_not_blank(cls, value: str) -> str:
        """Refuse to start with an empty signing secret."""
        if not value or not value.strip():
            raise ValueError("secret_key must not be empty")
        return value

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
