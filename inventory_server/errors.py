# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Request-level errors raised by the inventory services.

Each error carries the HTTP status it maps to. The FastAPI exception handler
in ``main.py`` turns them into ``{"error": message}`` responses. Per-zone
failures are never raised as these; they are absorbed by the aggregator and
resolver and reported as ``ZoneError`` entries instead.
"""


class InventoryError(Exception):
    """Base class for errors that end a request."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ZoneDiscoveryError(InventoryError):
    """Raised when the project's zone list cannot be fetched.

    Zone enumeration is the only call whose failure fails the whole
    request.
    """

    status_code = 500


class MissingResourceIdError(InventoryError):
    """Raised when no resource id was pinned at startup or given in the path."""

    status_code = 400

    def __init__(self, message: str = "Resource ID is required"):
        super().__init__(message)


class ResourceNotFoundError(InventoryError):
    """Raised when no zone holds an instance or disk with the requested name."""

    status_code = 404

    def __init__(self, resource_id: str):
        super().__init__("Resource not found")
        self.resource_id = resource_id


class ServiceUnavailableError(InventoryError):
    """Raised when the compute client could not be initialized at startup."""

    status_code = 503

    def __init__(self, message: str = "Service not initialized"):
        super().__init__(message)
