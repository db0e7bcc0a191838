"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app with its own event publisher
   - Tests can build independent instances

2. Lifespan Events
   - startup: log configuration
   - shutdown: end open subscriptions so WebSocket handlers exit cleanly

3. Middleware Stack
   - CORS: Allow cross-origin requests from configured origins

4. Exception Handlers
   - Convert database errors outside GraphQL to HTTP 500 responses
   - GraphQL errors are reported in the response body by Strawberry
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from library_api.config import get_settings
from library_api.graphql import create_graphql_router
from library_api.services.events import EventPublisher, EventType

# =============================================================================
# Logging Configuration
# =============================================================================
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
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Environment: {settings.environment}")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await app.state.events.close()


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
## Library Catalog API

GraphQL API for a library catalog of books, authors and users.

### Endpoint
- `POST /graphql` for queries and mutations
- WebSocket `/graphql` for the `bookAdded` subscription

### Authentication
Log in with the `login` mutation and send the returned token as
`Authorization: Bearer <token>`.
        """,
        version=settings.api_version,
        lifespan=lifespan,
    )

    # Publisher for subscription events, handed to resolvers via the context
    app.state.events = EventPublisher()

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

        Logs the actual error while hiding details from users.
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

        In debug mode, the error message is returned to the client.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
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
        """Report API status and the number of live bookAdded subscribers."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "graphql": {
                "endpoint": "/graphql",
                "ide_enabled": settings.graphql_ide_enabled,
            },
            "subscriptions": {
                "book_added": app.state.events.subscriber_count(EventType.BOOK_ADDED),
            },
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
            "version": settings.api_version,
            "graphql": "/graphql",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn library_api.main:app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "library_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
