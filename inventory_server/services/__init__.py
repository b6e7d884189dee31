"""Service layer for the GCP Resource Inventory Server."""

from .zone_discovery_service import ZoneDiscoveryService
from .resource_aggregator import ResourceAggregator
from .resource_resolver import ResourceResolver

__all__ = [
    "ZoneDiscoveryService",
    "ResourceAggregator",
    "ResourceResolver",
]
