# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Service container for dependency wiring and lifecycle management.

This module provides a ServiceContainer that initializes and holds the
compute client and the fan-out services. The HTTP app creates one at
startup and hands it to the request handlers, together with the settings
it was built from; nothing is kept in mutable module globals.
"""

import logging
from typing import Optional

from .clients.compute_client import ComputeClient
from .config import Settings, settings as get_default_settings
from .errors import ServiceUnavailableError
from .services.resource_aggregator import ResourceAggregator
from .services.resource_resolver import ResourceResolver
from .services.zone_discovery_service import ZoneDiscoveryService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Wires together the compute client and the services built on it.

    Usage::

        container = ServiceContainer()          # uses default settings
        await container.initialize()

        listing = await container.aggregator.list_resources(region_filter="us-central1")

        await container.shutdown()

    A pre-built compute client can be passed in, which is how tests supply
    an in-memory inventory.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        compute_client: Optional[ComputeClient] = None,
    ) -> None:
        """
        Create a ServiceContainer.

        Args:
            settings: Application settings. If None, loads from environment
                      variables / .env file via the default ``settings()`` helper.
            compute_client: Optional client to use instead of building one
                            from the configured credentials
        """
        self._settings: Settings = settings or get_default_settings()
        self._initialized = False
        self._owns_client = compute_client is None

        self._compute_client: Optional[ComputeClient] = compute_client
        self._zone_discovery: Optional[ZoneDiscoveryService] = None
        self._aggregator: Optional[ResourceAggregator] = None
        self._resolver: Optional[ResourceResolver] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Initialize all services.

        A compute client that cannot be built (missing credentials, bad key
        file) is logged and left as None so the server still starts and can
        report itself unhealthy; requests then fail with 503.
        """
        if self._initialized:
            logger.warning("ServiceContainer.initialize() called more than once")
            return

        s = self._settings
        logger.info(f"ServiceContainer: initializing services for project {s.project_id}")

        # 1. Compute Engine client
        if self._compute_client is None:
            try:
                self._compute_client = ComputeClient.from_credentials_file(
                    project_id=s.project_id,
                    credentials_file=s.credentials_file,
                    timeout_seconds=s.api_call_timeout_seconds,
                )
                logger.info("ServiceContainer: compute client initialized")
            except Exception as e:
                logger.error(f"ServiceContainer: unable to create GCP compute client: {e}")
                self._compute_client = None

        # 2. Fan-out services (depend on the compute client)
        if self._compute_client is not None:
            deadline = s.request_deadline_seconds or None
            self._zone_discovery = ZoneDiscoveryService(self._compute_client)
            self._aggregator = ResourceAggregator(
                compute_client=self._compute_client,
                zone_discovery=self._zone_discovery,
                max_concurrent_zones=s.max_concurrent_zones,
                deadline_seconds=deadline,
            )
            self._resolver = ResourceResolver(
                compute_client=self._compute_client,
                zone_discovery=self._zone_discovery,
                max_concurrent_zones=s.max_concurrent_zones,
                deadline_seconds=deadline,
            )
            logger.info("ServiceContainer: aggregator and resolver initialized")
        else:
            logger.warning("ServiceContainer: compute client unavailable, API routes will return 503")

        self._initialized = True
        logger.info("ServiceContainer: all services initialized")

    async def shutdown(self) -> None:
        """Close the compute client if this container created it."""
        logger.info("ServiceContainer: shutting down")
        if self._compute_client is not None and self._owns_client:
            try:
                self._compute_client.close()
            except Exception as e:
                logger.warning(f"ServiceContainer: error closing compute client: {e}")
        self._initialized = False
        logger.info("ServiceContainer: shutdown complete")

    # ------------------------------------------------------------------
    # Accessor properties
    # ------------------------------------------------------------------

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def compute_client(self) -> Optional[ComputeClient]:
        return self._compute_client

    @property
    def aggregator(self) -> ResourceAggregator:
        if self._aggregator is None:
            raise ServiceUnavailableError()
        return self._aggregator

    @property
    def resolver(self) -> ResourceResolver:
        if self._resolver is None:
            raise ServiceUnavailableError()
        return self._resolver
