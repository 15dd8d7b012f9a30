"""
Cultural Venues API - Main Application Entry Point

REST backend for browsing cultural venues and their events:
- JWT access tokens plus an http-only refresh cookie
- Role-gated routes for members and admins
- Comments and favorites on venues
- Dataset seeding on first start
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.api.errors import register_exception_handlers
from cultural_spa.api.middleware import RequestLoggingMiddleware
from cultural_spa.api.router import api_router
from cultural_spa.core.config import get_settings
from cultural_spa.core.logging import get_logger, setup_logging
from cultural_spa.core.metrics import metrics_endpoint
from cultural_spa.core.tokens import ensure_token_secrets
from cultural_spa.db.session import Database, get_db
from cultural_spa.services.seed_service import (
    get_dataset_updated_at,
    seed_dataset_if_needed,
    seed_users_if_needed,
)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    # Refuse to serve without signing secrets
    ensure_token_secrets(settings)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    database = Database.from_settings(settings)
    app.state.database = database

    if settings.DB_CREATE_ALL:
        await database.create_all()
        logger.info("database_tables_created")

    if settings.AUTO_SEED:
        async with database.sessionmaker() as session:
            await seed_users_if_needed(session)
            await seed_dataset_if_needed(session, settings.DATASET_DIR)

    yield

    await database.dispose()
    logger.info("application_shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Cultural venues, events, comments and favorites",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Credentialed CORS (refresh cookie) needs an explicit origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    async def health_check(db: AsyncSession = Depends(get_db)):
        """Health check endpoint for Docker and load balancers."""
        updated_at = await get_dataset_updated_at(db)
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "datasetUpdatedAt": updated_at.isoformat() if updated_at else None,
        }

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        return metrics_endpoint()

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs",
        }

    return app


app = create_app()
