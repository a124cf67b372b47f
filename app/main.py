"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: wait for the database and create missing tables
   - shutdown: dispose of the connection pool

3. Middleware Stack
   - CORS: Allow browser clients on other origins

4. Exception Handlers
   - Convert database errors to HTTP responses
   - Log errors for debugging

GraphQL errors (unauthenticated, bad input, wrong credentials) are not
HTTP errors: Strawberry returns them in the "errors" array of a 200 response.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.database import create_tables, engine, wait_for_database
from app.dependencies import DbSession
from app.graphql import create_graphql_router

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
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}, debug mode: {settings.debug}")

    wait_for_database()
    create_tables()

    logger.info(f"Server ready at http://{settings.host}:{settings.port}/graphql")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


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
## Library GraphQL API

Authors and books over a single GraphQL endpoint at `/graphql`.

### Authentication
Create a user with `createUser`, obtain a token with `login` and send it as
`Authorization: Bearer <token>`. Adding books and editing authors requires
a token.
        """,
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

        In debug mode the error message is returned to the client.
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
        description="Check if the API is running and the database reachable.",
    )
    def health_check(db: DbSession) -> JSONResponse:
        """
        Health check endpoint.

        Used by load balancers and container probes.
        """
        try:
            db.execute(text("SELECT 1"))
            database = "ok"
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {e}")
            database = "unreachable"

        healthy = database == "ok"
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "healthy" if healthy else "unhealthy",
                "app": settings.app_name,
                "database": database,
                "graphql": {
                    "endpoint": "/graphql",
                    "ide_enabled": settings.graphql_ide_enabled,
                },
            },
        )

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
            "graphql": "/graphql",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn app.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m app.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
