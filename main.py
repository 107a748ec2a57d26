"""Media Provider Backend - Main Application Entry Point
FastAPI application factory exposing the provider catalogue.
Architecture Overview:
    - Docker-backed media providers registered at import time (core/providers)
    - Service registry resolving github:<owner>/<repo> identifiers to local checkouts
    - Feature-based modules under features/
Entry Points:
    - /health - Liveness check
    - /api/v1/providers/* - Provider, model and health queries
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.environment import IS_PRODUCTION
from core.exceptions import ConfigurationError, NotFoundError, ServiceError, ValidationError
from core.http.errors import describe_service_error
from core.logging import setup_logging
from core.providers.docker.registry import get_service_registry
from core.providers.registries import get_provider_registry
from core.pydantic_schemas import error as api_error
from features.providers import router as providers_router

APP_VERSION = "1.0.0"

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log registered providers on startup and drop cached handles on shutdown."""

    logger.info(
        "Starting with providers: %s",
        ", ".join(get_provider_registry().get_available_providers()),
    )
    yield
    logger.info("Application shutting down...")
    get_provider_registry().clear_cache()
    get_service_registry().clear_cache()
    logger.info("Shutdown complete")


def _envelope_for(exc: ServiceError) -> JSONResponse:
    status_code, details = describe_service_error(exc)
    return JSONResponse(
        status_code=status_code,
        content=api_error(code=status_code, message=str(exc), data=details),
    )


def create_app() -> FastAPI:
    """Application factory returning a configured FastAPI instance."""

    app = FastAPI(
        title="Media Provider Backend",
        description="Uniform provider interface over Docker-hosted media services",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    if IS_PRODUCTION:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Any localhost port in dev
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        return _envelope_for(exc)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _envelope_for(exc)

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error("Configuration error while handling %s: %s", request.url.path, exc)
        return _envelope_for(exc)

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        logger.error("Service error while handling %s: %s", request.url.path, exc)
        return _envelope_for(exc)

    @app.get("/health", status_code=status.HTTP_200_OK)
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": APP_VERSION}

    app.include_router(providers_router)

    logger.info("Application created with providers router")
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
