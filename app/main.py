# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the DevCamper API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main          (host and port from API_HOST / API_PORT)
# =============================================================================

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings as default_settings
from app.context import AppContext
from app.exceptions import (
    DevCamperException,
    devcamper_exception_handler,
    duplicate_key_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.routers import bootcamps, courses, health, reviews, users
from app.auth import routes as auth_routes
from lib.mongo_client import MongoClientFactory

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: build the context (unless one was injected) and ensure indexes
    - Shutdown: close the MongoDB client the app created
    """
    owns_context = app.state.context is None
    if owns_context:
        app.state.context = AppContext.from_settings(app.state.settings)

    ctx: AppContext = app.state.context
    logger.info(f"Starting DevCamper API in {ctx.settings.ENVIRONMENT} mode")
    MongoClientFactory.ensure_indexes(ctx.db)

    yield

    logger.info("Shutting down DevCamper API")
    if owns_context:
        ctx.close()


def create_app(
    context: AppContext | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Prebuilt context (tests pass one with an in-memory database).
            When omitted, the lifespan builds one from settings.
        settings: Settings to use when no context is given.
    """
    app_settings = context.settings if context else (settings or default_settings)

    app = FastAPI(
        title="DevCamper API",
        description="""
## Bootcamp Directory API

Create, read, update and delete bootcamps, courses, reviews and users.

### Authentication

Register or log in to receive a bearer token. Send it as
`Authorization: Bearer <token>` or rely on the `token` cookie set at login.

### Advanced results

List endpoints accept filters (`averageCost[lte]=10000`, `careers[in]=Business`),
`select`, `sort` (default `-createdAt`), `page` and `limit` (default 25).
""",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Register, login and account management"},
            {"name": "Bootcamps", "description": "Bootcamp CRUD, radius search and photos"},
            {"name": "Courses", "description": "Courses offered by bootcamps"},
            {"name": "Reviews", "description": "Bootcamp reviews"},
            {"name": "Users", "description": "Admin user management"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )
    app.state.settings = app_settings
    app.state.context = context

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list if app_settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if app_settings.is_development:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
            return response

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(DevCamperException, devcamper_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(MongoDuplicateKeyError, duplicate_key_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(auth_routes.router, prefix=f"{API_PREFIX}/auth", tags=["Auth"])
    app.include_router(bootcamps.router, prefix=f"{API_PREFIX}/bootcamps", tags=["Bootcamps"])
    app.include_router(courses.router, prefix=API_PREFIX, tags=["Courses"])
    app.include_router(reviews.router, prefix=API_PREFIX, tags=["Reviews"])
    app.include_router(users.router, prefix=f"{API_PREFIX}/users", tags=["Users"])
    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - returns API info."""
        return {
            "name": "DevCamper API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": f"{API_PREFIX}/health",
        }

    return app


app = create_app()


def run(app_settings: Settings | None = None) -> None:
    """Serve the app on API_HOST:API_PORT."""
    app_settings = app_settings or default_settings
    uvicorn.run(
        "app.main:app",
        host=app_settings.API_HOST,
        port=app_settings.API_PORT,
        reload=app_settings.is_development,
    )


if __name__ == "__main__":
    run()
