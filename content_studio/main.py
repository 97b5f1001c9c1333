"""
Content Studio API
YouTube content generation with Google sign-in and plan-based usage limits.
"""
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from content_studio.api.routes import admin, auth, generate, plans, users
from content_studio.core.config import get_settings
from content_studio.core.logging import configure_logging

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create missing tables. Schema changes go through Alembic."""
    from content_studio.db.base import Base
    from content_studio.db.session import get_engine
    import content_studio.models  # noqa: F401 - register all models with Base

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables ensured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(f"Starting Content Studio API ({settings.environment}, storage={settings.storage_backend})")

    if settings.storage_backend == "sql":
        init_db()
    if not settings.google_client_id:
        logger.warning("GOOGLE_CLIENT_ID is not set. Google sign-in is unavailable.")

    yield

    logger.info("Shutting down Content Studio API")


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    # Details stay in the logs; the client only learns that something failed
    logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_format, settings.log_level)

    app = FastAPI(
        title="Content Studio API",
        version="1.0.0",
        docs_url=None if settings.is_production else "/docs",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url, "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    app.include_router(auth.router, prefix="/auth", tags=["Auth"])
    app.include_router(users.router, prefix="/user", tags=["User"])
    app.include_router(generate.router, prefix="/generate", tags=["Generate"])
    app.include_router(plans.router, prefix="/plans", tags=["Plans"])
    app.include_router(admin.router, prefix="/admin", tags=["Admin"])

    @app.get("/health")
    def health():
        return {"status": "healthy", "service": "content-studio-api"}

    return app


app = create_app()
