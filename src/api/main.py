"""Discovery API - Main FastAPI Application.

This module provides the FastAPI application for the Discovery Engine.
It includes:
- CORS middleware configuration
- API versioning (/api/v1)
- Health check endpoints
- Stateless discovery conversation endpoints

Usage:
    # Run with uvicorn
    uvicorn src.api.main:app --reload

    # Or run directly
    python -m src.api.main
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.dependencies import reset_dependencies
from src.api.models import ErrorResponse, ValidationErrorDetail, ValidationErrorResponse
from src.api.routes.discovery import router as discovery_router
from src.api.routes.health import API_VERSION, router as health_router, set_server_start_time
from src.config.settings import get_settings

logger = structlog.get_logger(__name__)

# API metadata for OpenAPI documentation
API_TITLE = "Discovery API"
API_DESCRIPTION = """
## Conversational requirements discovery for business apps

Describe a business in plain words and the engine works out which industry
kit, features and settings the generated app should use, asking a few short
questions along the way.

### Getting Started

1. **Start**: `POST /api/v1/discovery/start` with `{"description": "..."}`
2. **Continue**: `POST /api/v1/discovery/continue` with the returned `state` and the user's `message`
3. **Finish**: when `response.complete` is true, `response.app_config` holds the build configuration

The server stores nothing between turns; always send back the latest `state`.
"""


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Startup records the start time and logs provider configuration;
    shutdown drops cached singletons.
    """
    logger.info("application_starting")
    set_server_start_time()

    settings = get_settings()
    logger.info(
        "application_started",
        env=settings.app_env,
        ai_configured=settings.ai_configured,
        ai_model=settings.ai_model if settings.ai_configured else None,
    )

    yield

    logger.info("application_stopping")
    reset_dependencies()
    logger.info("application_stopped")


# Create FastAPI application
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=[
        {
            "name": "Health",
            "description": "System health and status endpoints",
        },
        {
            "name": "Discovery",
            "description": "Describe your business and answer a few questions to get an app configuration",
        },
    ],
)

# Configure CORS middleware (from settings)
_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allowed_origins,
    allow_credentials=_settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with detailed response."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        value = error.get("input")
        errors.append(ValidationErrorDetail(
            field=field,
            message=error["msg"],
            value=value if isinstance(value, (str, int, float, bool, type(None))) else None,
        ))

    response = ValidationErrorResponse(
        errors=errors,
        timestamp=datetime.now(timezone.utc),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )

    response = ErrorResponse(
        error="internal_server_error",
        message="An unexpected error occurred",
        detail=str(exc) if get_settings().debug else None,
        path=request.url.path,
        timestamp=datetime.now(timezone.utc),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump(mode="json"),
    )


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Root endpoint - points at the API documentation."""
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "api": "/api/v1",
    }


# =============================================================================
# Include Routers
# =============================================================================

# Health endpoints at root level
app.include_router(health_router)

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(discovery_router)

app.include_router(api_v1_router)


@app.get("/api/v1", include_in_schema=False)
async def api_v1_root() -> dict:
    """API v1 root - shows available endpoints."""
    return {
        "version": "v1",
        "endpoints": {
            "start": "/api/v1/discovery/start",
            "continue": "/api/v1/discovery/continue",
        },
        "documentation": "/docs",
    }


# =============================================================================
# Development Server
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
