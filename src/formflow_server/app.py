"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads forms and creates the session registry once
  - CORS middleware
  - Global exception handlers (ValueError → 404/409/400, KeyError → 404)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``formflow-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from formflow.interfaces import LoggingSubmissionSink
from formflow.store import FormStore

from formflow_server.config import ServerSettings, load_settings
from formflow_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from formflow_server.registry import SessionRegistry
from formflow_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup, tear down on shutdown.

    Startup:
      1. Load YAML forms into a ``FormStore``
      2. Create this app's ``SessionRegistry``
      3. Install the submission sink (unless a test already set one)

    Shutdown:
      1. Log how many in-memory sessions are lost
    """
    settings: ServerSettings = app.state.settings

    # --- Load forms ---
    store = FormStore(forms_dir=settings.forms_dir)
    store.load()
    logger.info("FormStore loaded successfully")

    app.state.store = store
    app.state.registry = SessionRegistry(ttl_minutes=settings.session_ttl_minutes)
    if getattr(app.state, "sink", None) is None:
        app.state.sink = LoggingSubmissionSink()

    yield

    # --- Shutdown ---
    abandoned = len(app.state.registry)
    logger.info("Shutdown: %d in-memory sessions lost", abandoned)


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Formflow API Server",
        description="REST API for step-by-step forms with conditional branching",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings
    app.state.sink = None

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — reports loaded forms and live sessions."""
        return {
            "status": "ok",
            "forms": len(app.state.store.forms),
            "sessions": len(app.state.registry),
        }

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn formflow_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``formflow-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "formflow_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
