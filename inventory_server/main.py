# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""FastAPI application entry point for the GCP Resource Inventory Server.

This module creates the FastAPI application, wires the service container
into the request handlers, configures CORS and correlation-ID middleware,
and maps inventory errors to ``{"error": message}`` responses.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, settings
from .container import ServiceContainer
from .errors import InventoryError, ResourceNotFoundError, ServiceUnavailableError
from .middleware import CorrelationIDMiddleware, get_cors_config, parse_cors_origins
from .models import HealthStatus, Resource, ZoneError
from .utils.cloud_logging import configure_cloud_logging
from .utils.error_sanitization import detect_sensitive_info, redact_sensitive_info

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

ZONE_ERRORS_HEADER = "X-Zone-Errors"
PARTIAL_RESULT_HEADER = "X-Partial-Result"

router = APIRouter()


# =============================================================================
# Dependencies
# =============================================================================


def get_container(request: Request) -> ServiceContainer:
    """Return the service container created at startup."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise ServiceUnavailableError()
    return container


def get_app_settings(request: Request) -> Settings:
    """Return the settings the app was created with."""
    return request.app.state.settings


def _resources_response(
    resources: list[Resource],
    zone_errors: list[ZoneError],
    timed_out: bool,
) -> JSONResponse:
    """Serialize resources as a JSON array, flagging absorbed zone errors in headers."""
    headers = {}
    if zone_errors:
        headers[ZONE_ERRORS_HEADER] = str(len(zone_errors))
    if timed_out:
        headers[PARTIAL_RESULT_HEADER] = "true"

    return JSONResponse(
        content=[r.model_dump(mode="json", by_alias=True) for r in resources],
        headers=headers,
    )


async def _resolve(container: ServiceContainer, resource_id: str) -> JSONResponse:
    result = await container.resolver.resolve(resource_id)
    if not result.found:
        raise ResourceNotFoundError(resource_id)
    return _resources_response(result.resources, result.zone_errors, result.timed_out)


# =============================================================================
# Routes
# =============================================================================


@router.get("/health", response_model=HealthStatus)
async def health_check(
    request: Request,
    app_settings: Settings = Depends(get_app_settings),
) -> HealthStatus:
    """
    Health check endpoint for monitoring server status.

    The server is healthy when the Compute Engine client was initialized.
    """
    container: Optional[ServiceContainer] = getattr(request.app.state, "container", None)
    ready = container is not None and container.compute_client is not None

    return HealthStatus(
        status="healthy" if ready else "unhealthy",
        version=__version__,
        project_id=app_settings.project_id,
        compute_client_ready=ready,
        pinned_resource_id=app_settings.resource_id,
    )


@router.get("/")
async def root(app_settings: Settings = Depends(get_app_settings)):
    """Root endpoint with API information."""
    return {
        "name": "GCP Resource Inventory Server",
        "version": __version__,
        "description": "Compute Engine instances and disks across all zones of a project",
        "project_id": app_settings.project_id,
        "pinned_resource_id": app_settings.resource_id,
        "health_check": "/health",
        "endpoints": {
            "list_resources": "/api/resources?region=<substr>&type=<instance|disk>",
            "get_resource": "/api/resources/{id}",
        },
    }


@router.get("/api/resources")
async def list_resources(
    region: str = Query(default="", description="Zone substring, e.g. us-central1"),
    resource_type: str = Query(default="", alias="type", description="instance or disk"),
    container: ServiceContainer = Depends(get_container),
) -> JSONResponse:
    """
    List instances and disks across all zones.

    When the server was started with a pinned resource id, this endpoint
    answers with that resource instead of a listing.
    """
    if container.settings.pinned_mode:
        return await _resolve(container, container.settings.resource_id)

    listing = await container.aggregator.list_resources(
        region_filter=region or None,
        type_filter=resource_type or None,
    )
    return _resources_response(listing.resources, listing.zone_errors, listing.timed_out)


@router.get("/api/resources/{resource_id}")
async def get_resource(
    resource_id: str,
    container: ServiceContainer = Depends(get_container),
) -> JSONResponse:
    """
    Look up an instance and/or disk by name in every zone.

    A pinned resource id overrides the one in the path.
    """
    if container.settings.pinned_mode:
        resource_id = container.settings.resource_id
    return await _resolve(container, resource_id)


# =============================================================================
# Error handling
# =============================================================================


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    """Map inventory errors to ``{"error": message}`` with their HTTP status."""
    message = exc.message
    sensitive = detect_sensitive_info(message)
    if sensitive:
        logger.warning(
            f"Redacting {', '.join(sorted(sensitive))} from error response for {request.url.path}"
        )
        message = redact_sensitive_info(message)

    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {message}")

    return JSONResponse(status_code=exc.status_code, content={"error": message})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled errors.

    Logs the error and returns a structured error response.
    """
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


# =============================================================================
# Application factory
# =============================================================================


def create_app(
    app_settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        app_settings: Settings to run with (default: loaded from environment)
        container: Pre-built service container; one is created from the
                   settings at startup when omitted

    Returns:
        Configured FastAPI application
    """
    if app_settings is None:
        app_settings = container.settings if container else settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - startup and shutdown.

        Builds the service container (compute client, zone discovery,
        aggregator, resolver) on startup and closes it on shutdown.
        """
        logger.info("Starting GCP Resource Inventory Server")

        configure_cloud_logging(
            project_id=app_settings.project_id,
            log_name=app_settings.cloud_logging_log_name,
            enable=app_settings.cloud_logging_enabled,
        )

        service_container = container or ServiceContainer(settings=app_settings)
        if not service_container.initialized:
            await service_container.initialize()
        app.state.container = service_container

        if app_settings.pinned_mode:
            logger.info(f"Pinned to resource {app_settings.resource_id!r}")
        logger.info(
            f"Inventory Server v{__version__} started for project {app_settings.project_id}"
        )

        yield

        logger.info("Shutting down GCP Resource Inventory Server")
        await service_container.shutdown()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="GCP Resource Inventory Server",
        description=(
            "Flattened, filterable listing of Compute Engine instances and "
            "persistent disks across every zone of a GCP project."
        ),
        version=__version__,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        **get_cors_config(parse_cors_origins(app_settings.cors_allowed_origins)),
    )
    app.add_middleware(CorrelationIDMiddleware)

    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(router)
    return app


app = create_app()
