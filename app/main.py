"""
Saved Searches API - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import create_api_router
from app.core.config import Settings, get_settings
from app.database import (
    get_sqlmodel_db_manager,
    init_sqlmodel_database,
    shutdown_sqlmodel_database,
)
from app.infrastructure.providers import reset_saved_search_repository
from app.middleware import RequestContextMiddleware


def configure_logging(settings: Settings) -> None:
    """Configure structured logging"""
    use_json = settings.LOG_FORMAT.lower() == "json" or not sys.stdout.isatty()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.LOG_LEVEL.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    settings = get_settings()
    logger.info(
        "Starting Saved Searches API",
        version=app.version,
        environment=settings.ENVIRONMENT,
    )

    try:
        logger.info("Initializing database connection")
        db_manager = await init_sqlmodel_database(settings)

        db_health = await db_manager.health_check()
        logger.info(
            "Database initialized successfully",
            status=db_health["status"],
            dialect=db_health.get("dialect"),
        )

    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        if settings.is_production():
            sys.exit(1)

    yield

    # Cleanup
    logger.info("Shutting down Saved Searches API")
    try:
        await reset_saved_search_repository()
        await shutdown_sqlmodel_database()
        logger.info("Database shutdown completed")
    except Exception as e:
        logger.error("Cleanup error", error=str(e))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as ``{"error": <message>}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are a 400, without field details."""
    logger.warning("Invalid request body", errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Owner-scoped saved search storage with usage tracking",
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        openapi_url="/openapi.json" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    setup_basic_middleware(app, settings)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API routes
    app.include_router(create_api_router())

    # Basic health check endpoint
    @app.get("/health")
    async def health_check():
        """Basic health check endpoint"""
        return {
            "status": "healthy",
            "version": app.version,
            "environment": settings.ENVIRONMENT,
        }

    # Database-specific health endpoint
    @app.get("/health/database")
    async def database_health_check():
        """Database-specific health check endpoint"""
        try:
            db_health = await get_sqlmodel_db_manager().health_check()
        except Exception as e:
            db_health = {"status": "unhealthy", "error": str(e)}

        db_health["timestamp"] = datetime.now(timezone.utc).isoformat()
        return db_health

    # API root
    @app.get("/")
    async def root():
        """API root endpoint"""
        return {
            "message": settings.APP_NAME,
            "version": app.version,
            "docs_url": "/docs" if not settings.is_production() else None
        }

    return app


def setup_basic_middleware(app: FastAPI, settings: Settings) -> None:
    """Setup all middleware during app creation"""

    # Binds request_id for every log line emitted inside a request
    app.add_middleware(RequestContextMiddleware)

    # CORS middleware
    cors_origins = settings.get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("All middleware configured successfully")


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,  # Use our structured logging
    )
