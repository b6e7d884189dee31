# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Single-resource resolver that probes every zone for a resource name.

This module provides the ResourceResolver class. Given a resource name it
looks up an instance and a disk with that name in every zone at once. Names
are expected to be unique per kind across the project, so the first match
recorded for a kind wins and any later match for the same kind is dropped
as redundant.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from ..clients.compute_client import ComputeClient
from ..errors import MissingResourceIdError
from ..models.aggregation import ResolutionResult, ZoneError
from ..models.enums import ResourceKind
from ..models.resource import Resource
from .fanout import join_with_deadline
from .normalizer import NORMALIZERS
from .resource_aggregator import DEFAULT_MAX_CONCURRENT_ZONES
from .zone_discovery_service import ZoneDiscoveryService

logger = logging.getLogger(__name__)


class ResourceResolver:
    """
    Resolves a resource name to at most one instance and one disk.

    Spawns one probe per (zone, kind). A probe that finds nothing is the
    normal case and is silent. A probe that fails for any other reason is
    absorbed and reported as a ZoneError. Every probe is awaited even after
    both kinds have matched.
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
            compute_client: Client used for the per-zone lookups
            zone_discovery: Service that enumerates the project's zones
            max_concurrent_zones: Maximum zones probed in parallel; each zone
                                  contributes one probe per kind
            deadline_seconds: Optional per-request deadline; None or 0 waits
                             for every probe
        """
        self.compute_client = compute_client
        self.zone_discovery = zone_discovery
        self.max_concurrent_zones = max_concurrent_zones
        self.deadline_seconds = deadline_seconds

    async def resolve(self, resource_id: str) -> ResolutionResult:
        """
        Look up a resource name in every zone, for both kinds.

        Args:
            resource_id: Instance or disk name

        Returns:
            ResolutionResult with zero, one or two resources, instance first

        Raises:
            MissingResourceIdError: If resource_id is empty
            ZoneDiscoveryError: If the zone list cannot be fetched
        """
        if not resource_id or not resource_id.strip():
            raise MissingResourceIdError()

        logger.info(f"Resolving resource {resource_id!r}")

        zones = await self.zone_discovery.get_zones()

        found: dict[ResourceKind, Resource] = {}
        found_locks = {kind: asyncio.Lock() for kind in ResourceKind}
        zone_errors: list[ZoneError] = []
        errors_lock = asyncio.Lock()
        semaphore = asyncio.Semaphore(self.max_concurrent_zones * len(ResourceKind))

        async def probe(zone: str, kind: ResourceKind) -> None:
            async with semaphore:
                try:
                    record = await self._lookup(zone, kind, resource_id)
                except Exception as e:
                    logger.warning(f"Looking up {kind.value} {resource_id!r} in zone {zone} failed: {e}")
                    async with errors_lock:
                        zone_errors.append(ZoneError(zone=zone, kind=kind, message=str(e)))
                    return

            if record is None:
                return

            resource = NORMALIZERS[kind](record)

            # Check and record as one step so two zones cannot both be first
            async with found_locks[kind]:
                if kind in found:
                    logger.debug(
                        f"Discarding redundant {kind.value} match for {resource_id!r} "
                        f"in zone {zone}; already found in {found[kind].zone}"
                    )
                    return
                found[kind] = resource

        probes: dict[asyncio.Task, tuple[str, ResourceKind]] = {}
        for zone in zones:
            for kind in ResourceKind:
                task = asyncio.create_task(probe(zone, kind), name=f"probe:{zone}:{kind.value}")
                probes[task] = (zone, kind)
        cancelled = await join_with_deadline(list(probes), self.deadline_seconds)

        for task in cancelled:
            zone, kind = probes[task]
            zone_errors.append(
                ZoneError(zone=zone, kind=kind, message="Request deadline exceeded")
            )

        resources = [found[kind] for kind in ResourceKind if kind in found]

        logger.info(
            f"Resolved {resource_id!r} to {len(resources)} resources "
            f"({', '.join(r.kind.value for r in resources) or 'none'}) "
            f"across {len(zones)} zones"
        )

        return ResolutionResult(
            resource_id=resource_id,
            resources=resources,
            zone_errors=zone_errors,
            timed_out=bool(cancelled),
        )

    async def _lookup(self, zone: str, kind: ResourceKind, name: str) -> Any:
        """Fetch one kind by name in one zone; None when the zone has no match."""
        getters: dict[ResourceKind, Callable[[str, str], Awaitable[Any]]] = {
            ResourceKind.INSTANCE: self.compute_client.get_instance,
            ResourceKind.DISK: self.compute_client.get_disk,
        }
        return await getters[kind](zone, name)
