"""Data models for the GCP Resource Inventory Server."""

from .enums import ResourceKind
from .resource import Resource, TIMESTAMP_UNAVAILABLE
from .aggregation import ResolutionResult, ResourceListing, ZoneError
from .health import HealthStatus

__all__ = [
    "ResourceKind",
    "Resource",
    "TIMESTAMP_UNAVAILABLE",
    "ZoneError",
    "ResourceListing",
    "ResolutionResult",
    "HealthStatus",
]
