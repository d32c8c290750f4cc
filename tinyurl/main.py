"""
FastAPI Application Entry Point

This module builds the FastAPI application and configures:
- API routes
- Middleware (request logging, CORS)
- Startup/shutdown of the database-backed services

Run with:
    uvicorn tinyurl.main:app
or:
    python -m tinyurl
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tinyurl.api import endpoints
from tinyurl.core.logging_config import setup_logging
from tinyurl.core.pool_manager import initialize_services, shutdown_services
from tinyurl.core.setting import Settings, settings
from tinyurl.middleware.logging import add_logging_middleware


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Services are attached to app.state.services on startup. Callers that
    build services themselves (tests) may assign app.state.services before
    the first request; startup then leaves them alone.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="tinyurl",
        description="Short code allocation and resolution service",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = app_settings
    app.state.services = None

    add_logging_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoint defined before router to match before catch-all route
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    app.include_router(endpoints.router, tags=["URL Shortener"])

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup."""
        setup_logging(app_settings.LOG_LEVEL)
        if app.state.services is None:
            app.state.services = await initialize_services(app_settings)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown."""
        if app.state.services is not None:
            await shutdown_services(app.state.services)
            app.state.services = None

    return app


app = create_app()
