"""
FastAPI application for the Espresso API.
"""

from __future__ import annotations

import importlib.metadata
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .artifacts import ArtifactOracle, build_artifact_oracle
from .config import Settings, get_settings
from .hierarchy.routes import router as espresso_router
from .log import LogLabel, configure_logging
from .store import DocumentStore, build_document_store

# Initialize structured logging
logger = structlog.get_logger()

system_router = APIRouter(tags=["Default"])


@system_router.get("/healthcheck")
def healthcheck() -> dict[str, str]:
    """Check the health of the service."""
    return {"message": "OK"}


@system_router.get("/version")
def version() -> dict[str, str]:
    """Return the version of the application."""
    return {"version": importlib.metadata.version("espresso-api")}


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    oracle: Optional[ArtifactOracle] = None,
) -> FastAPI:
    """
    Build the application.

    A store or oracle passed in is used as-is and left open on shutdown;
    missing ones are built from settings at startup and closed on shutdown.
    """
    settings = settings or get_settings()
    prefix = settings.api_prefix

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        owned_store = None
        # Startup
        if getattr(app.state, "store", None) is None:
            try:
                owned_store = build_document_store(settings)
            except Exception as e:
                logger.critical(
                    "document_store_connection_failed",
                    label=LogLabel.FIREBASE_CONNECTION.value,
                    backend=settings.document_store,
                    error=str(e),
                )
                raise
            app.state.store = owned_store
        if getattr(app.state, "oracle", None) is None:
            app.state.oracle = build_artifact_oracle(settings)

        logger.info(
            "server_started",
            label=LogLabel.SERVER_STARTUP.value,
            prefix=prefix,
            document_store=type(app.state.store).__name__,
            artifact_oracle=type(app.state.oracle).__name__,
        )

        yield

        # Shutdown
        if owned_store is not None:
            owned_store.close()
            app.state.store = None
        logger.info("server_stopped", label=LogLabel.SERVER_STARTUP.value)

    app = FastAPI(
        title="Espresso API",
        description="Companies, widgets and branches with deployment artifact checks",
        version="2.0.0",
        lifespan=lifespan,
        docs_url=f"{prefix}/docs",
        redoc_url=None,
        openapi_url=f"{prefix}/postman.json",
    )
    app.state.settings = settings
    app.state.store = store
    app.state.oracle = oracle

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def fallback_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404:
            logger.warning(
                "route_not_found",
                label=LogLabel.MIDDLEWARE_FALLBACK.value,
                method=request.method,
                path=request.url.path,
            )
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    app.include_router(system_router, prefix=prefix)
    app.include_router(espresso_router, prefix=prefix)

    return app


configure_logging(get_settings())
app = create_app()
