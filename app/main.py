# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the PortfoliosHub API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.config import settings
from app.exceptions import (
    PortfoliosHubException,
    portfolioshub_exception_handler,
    validation_exception_handler,
)
from app.routers import health, portfolios, submissions, favorites, uploads
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    logger.info(f"Starting PortfoliosHub API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Images bucket: {settings.IMAGES_BUCKET}")

    yield

    logger.info("Shutting down PortfoliosHub API")


# Create FastAPI application
app = FastAPI(
    title="PortfoliosHub API",
    description="""
## A curated directory of personal portfolios

### How It Works

1. **Submit** - A signed-in user proposes a portfolio (name, link, tags)
2. **Review** - An admin edits the pending submission and attaches a screenshot
3. **Approve** - The portfolio is published and the submission marked completed
4. **Favorite** - Users bookmark portfolios; each keeps a favorites count

### Screenshots

Admin write endpoints accept multipart forms with an `image` file, or an
`image_path` obtained from `POST /api/v1/uploads/url`. Replacing an image
uploads the new one before removing the old one.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Verify JWT tokens and read the current profile",
        },
        {
            "name": "Portfolios",
            "description": "Browse the directory; admins publish and edit",
        },
        {
            "name": "Submissions",
            "description": "Propose portfolios and review the queue",
        },
        {
            "name": "Favorites",
            "description": "Bookmark portfolios",
        },
        {
            "name": "Uploads",
            "description": "Signed URLs for direct screenshot uploads",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PortfoliosHubException)
async def handle_portfolioshub_exception(request: Request, exc: PortfoliosHubException):
    """Handle custom PortfoliosHub exceptions."""
    return await portfolioshub_exception_handler(request, exc)


@app.exception_handler(ValidationError)
async def handle_validation_error(request: Request, exc: ValidationError):
    """Handle models built from form fields inside route handlers."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_error(request: Request, exc: SupabaseClientError):
    """Handle backend failures."""
    logger.error(f"Backend error on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content=exc.to_dict())


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

app.include_router(
    portfolios.router,
    prefix="/api/v1/portfolios",
    tags=["Portfolios"]
)

app.include_router(
    submissions.router,
    prefix="/api/v1/submissions",
    tags=["Submissions"]
)

app.include_router(
    favorites.router,
    prefix="/api/v1/favorites",
    tags=["Favorites"]
)

app.include_router(
    uploads.router,
    prefix="/api/v1/uploads",
    tags=["Uploads"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "PortfoliosHub API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
