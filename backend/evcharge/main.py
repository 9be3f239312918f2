"""Main FastAPI application."""
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from evcharge import __version__
from evcharge.api import auth, stations
from evcharge.config import Settings, get_settings
from evcharge.database import Database
from evcharge.services.token_service import TokenService
from evcharge.utils.exceptions import setup_exception_handlers
from evcharge.utils.logger import configure_logging, logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to storage before serving; a failed connection stops startup."""
    database: Database = app.state.database
    database.verify_connection()
    database.create_tables()
    logger.info("EV Charging Station API started")
    try:
        yield
    finally:
        database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment,
            which fails fast when the signing secret or database URL is missing.

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.environment)

    app = FastAPI(
        title="EV Charging Station API",
        description="Backend API for managing electric-vehicle charging stations",
        version=__version__,
        lifespan=lifespan,
    )

    # Process-wide state, read-only after startup
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.token_service = TokenService(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(hours=settings.access_token_expire_hours),
    )

    # Configure CORS
    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    setup_exception_handlers(app, development=settings.is_development)

    # Include routers
    app.include_router(auth.router)
    app.include_router(stations.router)
    if settings.enable_seed_endpoint:
        app.include_router(stations.seed_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "EV Charging Station API",
            "version": __version__,
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
