"""Main FastAPI application."""

from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from config import get_settings
from core.database import init_database
from core.exceptions import AppException
from core.logging import setup_logging
from core.middleware import LoggingMiddleware
from routers import (
    auth,
    chat,
    health,
    lists,
    notes,
    projects,
    tasks,
)
from routers import settings as settings_router

# Get settings
settings = get_settings()

# Setup structured logging
setup_logging()
logger = structlog.get_logger()

INSECURE_JWT_SECRETS = [
    "INSECURE-DEFAULT-CHANGE-ME-32CHARS-MIN",
    "INSECURE-DEFAULT-CHANGE-ME",
    "your-secret-key-change-in-production",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    _validate_security_config()

    logger.info("Starting ProjectNest API", version=settings.app_version)

    if settings.auto_create_tables:
        await init_database()
    else:
        logger.info("Skipping automatic table creation; run alembic migrations")

    if settings.sentry_dsn and settings.environment != "development":
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry_profiles_sample_rate,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                SqlalchemyIntegration(),
            ],
        )
        logger.info("Sentry initialized")

    yield

    logger.info("Shutting down ProjectNest API")


def _validate_security_config():
    """Validate security configuration on startup."""
    errors = []

    if settings.is_test():
        logger.info("Skipping security validation in test environment")
        return

    if settings.jwt_secret in INSECURE_JWT_SECRETS:
        errors.append(
            "CRITICAL: Using default JWT_SECRET! Set a secure random key in environment variables."
        )

    if len(settings.jwt_secret) < 32:
        errors.append(
            f"CRITICAL: JWT_SECRET too short ({len(settings.jwt_secret)} chars). Must be at least 32 characters."
        )

    if settings.environment == "production":
        if "password" in settings.database_url.lower() or "123" in settings.database_url:
            logger.warning(
                "Database URL contains weak password patterns. Use strong passwords in production."
            )

    if errors:
        for error in errors:
            logger.error(error)
        raise RuntimeError(
            f"Security validation failed with {len(errors)} error(s). Fix configuration and restart."
        )


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_credentials,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
)
app.add_middleware(LoggingMiddleware)


# Exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle application exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "business_error",
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
            }
        },
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render malformed request bodies and parameters as 400."""
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg"),
            "type": error.get("type"),
        }
        for error in exc.errors()
    ]
    logger.warning("request_validation_error", errors=errors)

    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "BAD_REQUEST",
                "message": "Invalid request",
                "details": {"errors": errors},
            }
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error("unhandled_error", error=str(exc), exc_info=True)

    # Don't expose internal errors in production
    if settings.debug:
        error_message = str(exc)
    else:
        error_message = "Internal server error"

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": error_message,
            }
        },
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
app.include_router(lists.router, prefix="/api/lists", tags=["Lists"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(notes.router, prefix="/api/notes", tags=["Notes"])
app.include_router(notes.folders_router, prefix="/api/folders", tags=["Folders"])
app.include_router(chat.router, prefix="/api/chat", tags=["Chat"])
app.include_router(settings_router.router, prefix="/api/settings", tags=["Settings"])


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
