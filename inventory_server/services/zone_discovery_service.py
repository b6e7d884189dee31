# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Zone discovery service for the multi-zone fan-out.

This module enumerates the zones of a GCP project with the Compute Engine
Zones API. Zone enumeration runs once per request and is the single point
of failure of the fan-out: if it fails, there is nothing to fan out over,
so the error propagates to the HTTP layer instead of falling back.
"""

import logging

from ..clients.compute_client import ComputeClient
from ..errors import ZoneDiscoveryError

logger = logging.getLogger(__name__)


class ZoneDiscoveryService:
    """
    Lists the zones of the configured project.

    Results are not cached; every request sees the provider's current
    zone list.
    """

    def __init__(self, compute_client: ComputeClient):
        """
        Initialize with a Compute Engine client.

        Args:
            compute_client: Client bound to the project being inventoried
        """
        self.compute_client = compute_client

    async def get_zones(self) -> list[str]:
        """
        Get the names of all zones in the project.

        Returns:
            Zone names in provider order (e.g. ["us-central1-a", ...])

        Raises:
            ZoneDiscoveryError: If the zone list cannot be fetched
        """
        try:
            zones = await self.compute_client.list_zones()
        except Exception as e:
            logger.error(f"Zone discovery failed: {e}")
            raise ZoneDiscoveryError(f"Unable to fetch zones: {e}") from e

        zone_names = zone_names_from_records(zones)
        logger.info(f"Discovered {len(zone_names)} zones")
        return zone_names


def zone_names_from_records(zones: list) -> list[str]:
    """
    Extract zone names from zone records, skipping unnamed entries.

    This is a pure function that can be used for testing and validation.

    Args:
        zones: compute_v1.Zone records (or anything with a ``name`` attribute)

    Returns:
        Zone names, duplicates removed, provider order preserved
    """
    names: list[str] = []
    seen: set[str] = set()
    for zone in zones:
        name = getattr(zone, "name", "")
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return names
