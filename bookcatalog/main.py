"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: Log configuration, create tables for local SQLite databases
   - shutdown: Report subscribers still attached

3. Middleware Stack
   - CORS: Allow browser clients (Apollo Sandbox, frontends) to call /graphql

4. Exception Handlers
   - Convert database errors to HTTP responses
   - Log errors for debugging

GraphQL errors (validation, authentication) never reach these handlers:
Strawberry turns them into the ``errors`` list of a 200 response. Only the
auth guard's 401 and unexpected failures are plain HTTP errors.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bookcatalog import __version__
from bookcatalog.config import get_settings
from bookcatalog.database import create_tables
from bookcatalog.graphql import create_graphql_router
from bookcatalog.services.pubsub import get_notification_hub

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Catalog store backend: {settings.store_backend}")

    # PostgreSQL schemas are managed by Alembic; a local SQLite file is not
    if settings.store_backend == "sql" and settings.database_url.startswith("sqlite"):
        create_tables()
        logger.info("SQLite tables created")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    remaining = get_notification_hub().get_total_subscribers()
    logger.info(f"Shutting down {settings.app_name} ({remaining} subscribers attached)")


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Catalog API

A GraphQL API for a catalog of books and their authors.

### Features
- **Books**: List with author/genre filters, add new books
- **Authors**: Created on first mention, live book counts
- **Subscriptions**: `bookAdded` pushes every new book over WebSocket

### Authentication
Call the `login` mutation and send the token as `Authorization: Bearer <token>`.
        """,
        version=__version__,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        Internal details are shown only in debug mode outside production.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug and not settings.is_production:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # GraphQL Endpoint
    # -------------------------------------------------------------------------
    # Queries and mutations over HTTP POST, subscriptions over WebSocket.
    graphql_router = create_graphql_router()
    app.include_router(graphql_router, prefix="/graphql", tags=["GraphQL"])

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    async def health_check() -> dict:
        """
        Health check endpoint.

        Returns API status, store backend and live subscriber counts.
        """
        hub_stats = get_notification_hub().get_stats()

        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
            "store": {
                "backend": settings.store_backend,
            },
            "graphql": {
                "endpoint": "/graphql",
                "ide_enabled": settings.graphql_ide_enabled,
            },
            "subscriptions": hub_stats,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "docs": "/docs",
            "graphql": "/graphql",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookcatalog.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookcatalog.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookcatalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
