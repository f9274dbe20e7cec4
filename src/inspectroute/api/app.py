"""FastAPI application with lifespan, error mapping and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from supabase import create_client

from inspectroute.api.routes import billing, health, profiles, route_queries, uploads
from inspectroute.core.config import AppSettings
from inspectroute.core.exceptions import (
    AuthenticationError,
    BillingError,
    InspectRouteError,
    InvalidUploadError,
    ProfileNotFoundError,
    StoreError,
    UnreadableFileError,
    WorkflowError,
)
from inspectroute.core.logging import configure_logging
from inspectroute.persistence import create_persistence
from inspectroute.services.auth import SupabaseAuthVerifier
from inspectroute.services.billing import BillingService
from inspectroute.services.workflow import WorkflowClient

logger = logging.getLogger(__name__)

OPERATION_FAILED = "Operation failed"

_STATUS_BY_ERROR: list[tuple[type[InspectRouteError], int]] = [
    (AuthenticationError, 401),
    (ProfileNotFoundError, 404),
    (InvalidUploadError, 400),
    (UnreadableFileError, 400),
    (StoreError, 502),
    (WorkflowError, 502),
    (BillingError, 502),
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings = AppSettings()
    configure_logging(settings.log_level)
    app.state.settings = settings

    profile_store, cache = create_persistence(settings)
    app.state.profile_store = profile_store
    app.state.cache = cache
    app.state.auth_verifier = SupabaseAuthVerifier(
        create_client(settings.supabase.url, settings.supabase.service_role_key)
    )
    app.state.workflow = WorkflowClient(settings.workflow)
    app.state.billing = BillingService(settings.stripe)
    logger.info("Service started", extra={"step": "startup"})
    try:
        yield
    finally:
        await app.state.workflow.aclose()


async def handle_service_error(request: Request, exc: InspectRouteError) -> JSONResponse:
    """Map the exception hierarchy onto HTTP responses.

    Failures of external collaborators surface as a generic message.
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = 500

    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse({"error": OPERATION_FAILED}, status_code=status_code)
    return JSONResponse({"error": str(exc)}, status_code=status_code)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="InspectRoute Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(InspectRouteError, handle_service_error)
    app.include_router(health.router)
    app.include_router(profiles.router, prefix="/profiles")
    app.include_router(uploads.router, prefix="/uploads")
    app.include_router(route_queries.router, prefix="/routes")
    app.include_router(billing.router, prefix="/billing")
    return app
