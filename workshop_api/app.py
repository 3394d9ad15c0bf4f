"""
FastAPI application entry point for the workshop API.

Serve with ``workshop-api`` or ``uvicorn --factory workshop_api.app:create_app``.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from workshop_api.auth import AdminAuthenticator
from workshop_api.config import Settings, get_settings
from workshop_api.errors import InvalidBody, WorkshopApiError
from workshop_api.routes import API_VERSION, router
from workshop_api.schemas import HealthResponse
from workshop_api.static import SinglePageStaticFiles
from workshop_api.store import DocumentStore, build_document_store

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(WorkshopApiError)
    async def handle_api_error(request: Request, exc: WorkshopApiError):
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return _error_response(InvalidBody.status_code, InvalidBody.default_message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def create_app(
    settings: Optional[Settings] = None, store: Optional[DocumentStore] = None
) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = build_document_store(settings)

    if settings.uses_default_admin_password:
        logger.warning(
            "ADMIN_PASSWORD is not set; using the built-in development password"
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        store.close()

    app = FastAPI(title="Workshop API", version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.authenticator = AdminAuthenticator(settings.admin_password)

    _register_error_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    if os.path.isdir(settings.static_dir):
        logger.info("Serving front-end from %s", settings.static_dir)
        app.mount(
            "/",
            SinglePageStaticFiles(directory=settings.static_dir),
            name="frontend",
        )
    else:
        logger.info("No front-end bundle at %s; serving API only", settings.static_dir)

    return app
