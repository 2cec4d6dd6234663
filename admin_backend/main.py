"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin_backend.config import Settings, get_settings
from admin_backend.core.envelope import EnvelopeRoute
from admin_backend.core.exceptions import AppError, global_exception_handler
from admin_backend.core.logging import configure_logging
from admin_backend.core.middleware import setup_middleware
from admin_backend.infrastructure.database import Base, build_engine, build_session_factory

# Import all models so SQLAlchemy knows about them
from admin_backend.domain.models.role import Role  # noqa: F401
from admin_backend.domain.models.user import User  # noqa: F401

from admin_backend.interfaces.api.users import router as users_router

APP_NAME = "Admin Backend"
APP_VERSION = "1.0.0"

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info("Starting Admin Backend...", env=settings.ENVIRONMENT, port=settings.APP_PORT)

    # Create DB tables outside production (migrations own the schema there)
    if not settings.is_production:
        Base.metadata.create_all(bind=app.state.engine)
        logger.info("Database tables created/verified")

    yield

    app.state.engine.dispose()
    logger.info("Admin Backend stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application from a settings object fixed before any route exists."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=APP_NAME,
        description="Administrative API for managing users",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url=settings.DOCS_PATH,
        openapi_url=f"{settings.DOCS_PATH}-json",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.router.route_class = EnvelopeRoute

    setup_middleware(app, settings)

    # Global Exception Handling
    for exc_class in (AppError, StarletteHTTPException, RequestValidationError, SQLAlchemyError, Exception):
        app.add_exception_handler(exc_class, global_exception_handler)

    app.include_router(users_router, prefix=f"/v{settings.API_VERSION}")

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "healthy"}

    return app
