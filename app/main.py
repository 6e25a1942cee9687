# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the portfolio API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --port 3000 --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    PortfolioException,
    http_exception_handler,
    portfolio_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
)
from app.middleware import log_requests
from app.routers import apps, health, mail, projects, public
from core.services import AttachmentService
from lib.database import close_pool, open_pool

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: open the database pool and publish it on app.state
    - Shutdown: close the pool once in-flight requests have released it
    """
    logger.info(f"Starting portfolio API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    app.state.db_pool = await open_pool(settings)

    yield

    logger.info("Shutting down portfolio API")
    await close_pool(app.state.db_pool)


# Create FastAPI application
app = FastAPI(
    title="Portfolio API",
    description="Contact mail, login and table-scoped app/project records for the studio website.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.attachments = AttachmentService(
    settings.UPLOAD_DIR,
    max_bytes=settings.max_upload_size_bytes,
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _log_requests(request: Request, call_next):
    return await log_requests(request, call_next)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(PortfolioException, portfolio_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(mail.router, prefix="/api", tags=["Mail"])
app.include_router(auth_routes.router, prefix="/api", tags=["Auth"])
app.include_router(apps.router, prefix="/api", tags=["Apps"])
app.include_router(projects.router, prefix="/api", tags=["Projects"])

# Catch-all: stored files, then the 404 shape. Keep last.
app.include_router(public.router)
