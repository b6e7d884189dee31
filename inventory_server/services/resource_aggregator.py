# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Parallel aggregator for listing resources across every zone.

This module provides the ResourceAggregator class that lists instances and
disks in all zones of a project concurrently, applies the region and type
filters to each record, and merges the survivors into one flat listing.

A failure listing one kind in one zone is treated as zero results for that
(zone, kind) pair and recorded as a ZoneError; only zone discovery can fail
the whole listing.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from ..clients.compute_client import ComputeClient
from ..models.aggregation import ResourceListing, ZoneError
from ..models.enums import ResourceKind
from ..models.resource import Resource
from .fanout import join_with_deadline
from .normalizer import NORMALIZERS, matches_filters
from .zone_discovery_service import ZoneDiscoveryService

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT_ZONES = 32


class ResourceAggregator:
    """
    Lists instances and disks from all zones in parallel.

    One task is spawned per zone. Each task lists the zone's instances and
    then its disks, filters and normalizes the records, and appends them to
    a list shared by every task of the request. Appends happen under an
    asyncio.Lock; results are returned only after every zone task has
    finished (or the optional deadline has expired).
    """

    def __init__(
        self,
        compute_client: ComputeClient,
        zone_discovery: ZoneDiscoveryService,
        max_concurrent_zones: int = DEFAULT_MAX_CONCURRENT_ZONES,
        deadline_seconds: Optional[float] = None,
    ):
        """
        Initialize with dependencies and configuration.

        Args:
            compute_client: Client used for the per-zone listing calls
            zone_discovery: Service that enumerates the project's zones
            max_concurrent_zones: Maximum zones listed in parallel (default: 32)
            deadline_seconds: Optional per-request deadline; None or 0 waits
                             for every zone
        """
        self.compute_client = compute_client
        self.zone_discovery = zone_discovery
        self.max_concurrent_zones = max_concurrent_zones
        self.deadline_seconds = deadline_seconds

        logger.info(
            f"ResourceAggregator initialized: max_concurrent={max_concurrent_zones}, "
            f"deadline={deadline_seconds or 'none'}"
        )

    async def list_resources(
        self,
        region_filter: Optional[str] = None,
        type_filter: Optional[str] = None,
    ) -> ResourceListing:
        """
        List every resource in the project that passes the filters.

        Args:
            region_filter: Keep records whose raw zone string contains this
                           substring (e.g. "us-central1")
            type_filter: Keep records of this kind only ("instance" or "disk");
                         any other non-empty value matches nothing

        Returns:
            Merged listing with absorbed per-zone errors

        Raises:
            ZoneDiscoveryError: If the zone list cannot be fetched
        """
        logger.info(
            f"Listing resources: region_filter={region_filter!r}, type_filter={type_filter!r}"
        )

        zones = await self.zone_discovery.get_zones()

        # A kind the type filter excludes cannot contribute, so skip its calls
        kinds = [
            kind for kind in ResourceKind
            if not type_filter or type_filter == kind.value
        ]

        resources: list[Resource] = []
        zone_errors: list[ZoneError] = []
        lock = asyncio.Lock()
        semaphore = asyncio.Semaphore(self.max_concurrent_zones)

        async def scan_zone(zone: str) -> None:
            async with semaphore:
                for kind in kinds:
                    try:
                        batch = await self._list_zone_kind(zone, kind, region_filter, type_filter)
                    except Exception as e:
                        logger.warning(f"Listing {kind.value}s in zone {zone} failed: {e}")
                        async with lock:
                            zone_errors.append(ZoneError(zone=zone, kind=kind, message=str(e)))
                        continue

                    if batch:
                        async with lock:
                            resources.extend(batch)

        tasks = [
            asyncio.create_task(scan_zone(zone), name=f"list-zone:{zone}")
            for zone in zones
        ]
        cancelled = await join_with_deadline(tasks, self.deadline_seconds)

        for zone, task in zip(zones, tasks):
            if task in cancelled:
                zone_errors.append(
                    ZoneError(zone=zone, message="Request deadline exceeded")
                )

        if zone_errors:
            logger.warning(
                f"Listing completed with {len(zone_errors)} absorbed zone errors "
                f"across {len(zones)} zones"
            )

        logger.info(f"Listed {len(resources)} resources from {len(zones)} zones")

        return ResourceListing(
            resources=list(resources),
            zones_queried=zones,
            zone_errors=zone_errors,
            timed_out=bool(cancelled),
        )

    async def _list_zone_kind(
        self,
        zone: str,
        kind: ResourceKind,
        region_filter: Optional[str],
        type_filter: Optional[str],
    ) -> list[Resource]:
        """
        List one kind in one zone and keep the records that pass the filters.

        Filters are checked against the record's raw zone field before it is
        normalized. Provider order is preserved.
        """
        listers: dict[ResourceKind, Callable[[str], Awaitable[list[Any]]]] = {
            ResourceKind.INSTANCE: self.compute_client.list_instances,
            ResourceKind.DISK: self.compute_client.list_disks,
        }
        records = await listers[kind](zone)
        normalize = NORMALIZERS[kind]
        return [
            normalize(record)
            for record in records
            if matches_filters(record.zone, kind, region_filter, type_filter)
        ]
