# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Compute Engine client wrapper for zone, instance and disk inventory."""

import asyncio
import functools
import logging
import os
from typing import Any, Callable, Optional

import google.auth
from google.api_core.exceptions import GoogleAPIError, NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import compute_v1

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


class ComputeAPIError(Exception):
    """Raised when a Compute Engine API call fails."""

    pass


def load_credentials(credentials_file: Optional[str]) -> Any:
    """
    Load credentials from a JSON file, or defer to Application Default Credentials.

    Accepts both service-account keys and the ``application_default_credentials.json``
    written by ``gcloud auth application-default login``.

    Args:
        credentials_file: Path to the credentials file, or None

    Returns:
        A google.auth credentials object, or None to let the client library
        resolve ADC on its own
    """
    if not credentials_file:
        return None
    if not os.path.exists(credentials_file):
        logger.warning(
            f"Credentials file {credentials_file} not found, using Application Default Credentials"
        )
        return None

    credentials, _ = google.auth.load_credentials_from_file(
        credentials_file, scopes=[CLOUD_PLATFORM_SCOPE]
    )
    logger.info(f"Loaded GCP credentials from {credentials_file}")
    return credentials


class ComputeClient:
    """
    Wrapper around the compute_v1 clients bound to one project.

    The underlying clients are synchronous; every call is run in the default
    thread-pool executor so zone probes can be awaited concurrently. Listing
    calls read a single page per zone. No retries are attempted here: the
    fan-out treats a failed call as zero results for that zone.
    """

    def __init__(
        self,
        project_id: str,
        credentials: Any = None,
        timeout_seconds: float = 30.0,
    ):
        """
        Initialize Compute Engine clients.

        Args:
            project_id: GCP project to inventory
            credentials: google.auth credentials (None for ADC)
            timeout_seconds: Timeout applied to every API call
        """
        self.project_id = project_id
        self.timeout_seconds = timeout_seconds

        self.zones = compute_v1.ZonesClient(credentials=credentials)
        self.instances = compute_v1.InstancesClient(credentials=credentials)
        self.disks = compute_v1.DisksClient(credentials=credentials)

    @classmethod
    def from_credentials_file(
        cls,
        project_id: str,
        credentials_file: Optional[str],
        timeout_seconds: float = 30.0,
    ) -> "ComputeClient":
        """Build a client using ``load_credentials`` for the given file."""
        return cls(
            project_id=project_id,
            credentials=load_credentials(credentials_file),
            timeout_seconds=timeout_seconds,
        )

    def close(self) -> None:
        """Close the underlying HTTP transports."""
        for client in (self.zones, self.instances, self.disks):
            client.transport.close()

    async def _call(self, operation: str, func: Callable[..., Any], **kwargs: Any) -> Any:
        """
        Run a blocking Compute Engine call in the thread pool.

        The client library's default retry policy is switched off, so each
        call is a single attempt bounded by ``timeout_seconds``.

        Args:
            operation: Short name used in error messages
            func: compute_v1 client method (or a callable wrapping one)
            **kwargs: Keyword arguments for the method

        Returns:
            Whatever the method returns

        Raises:
            NotFound: Passed through untouched so callers can treat it as a miss
            ComputeAPIError: For any other failure (API, auth or transport)
        """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                None,
                functools.partial(func, retry=None, timeout=self.timeout_seconds, **kwargs),
            )
        except NotFound:
            raise
        except (GoogleAPIError, GoogleAuthError) as e:
            raise ComputeAPIError(f"Compute API error during {operation}: {e}") from e
        except Exception as e:
            raise ComputeAPIError(f"Error calling Compute API during {operation}: {e}") from e

    @staticmethod
    def _first_page(pager: Any) -> list:
        # List pagers proxy attribute access to the first response page
        return list(pager.items)

    async def list_zones(self) -> list[compute_v1.Zone]:
        """
        List the zones available to the project.

        Returns:
            Zone records (first page)
        """
        pager = await self._call("zones.list", self.zones.list, project=self.project_id)
        return self._first_page(pager)

    async def list_instances(self, zone: str) -> list[compute_v1.Instance]:
        """
        List VM instances in one zone.

        Args:
            zone: Short zone name (e.g. us-central1-a)

        Returns:
            Instance records in provider order (first page)
        """
        pager = await self._call(
            f"instances.list({zone})", self.instances.list, project=self.project_id, zone=zone
        )
        return self._first_page(pager)

    async def list_disks(self, zone: str) -> list[compute_v1.Disk]:
        """
        List persistent disks in one zone.

        Args:
            zone: Short zone name

        Returns:
            Disk records in provider order (first page)
        """
        pager = await self._call(
            f"disks.list({zone})", self.disks.list, project=self.project_id, zone=zone
        )
        return self._first_page(pager)

    async def get_instance(self, zone: str, name: str) -> compute_v1.Instance | None:
        """
        Fetch one instance by name.

        Returns:
            The instance, or None if the zone has no instance with that name
        """
        try:
            return await self._call(
                f"instances.get({zone}/{name})",
                self.instances.get,
                project=self.project_id,
                zone=zone,
                instance=name,
            )
        except NotFound:
            return None

    async def get_disk(self, zone: str, name: str) -> compute_v1.Disk | None:
        """
        Fetch one disk by name.

        Returns:
            The disk, or None if the zone has no disk with that name
        """
        try:
            return await self._call(
                f"disks.get({zone}/{name})",
                self.disks.get,
                project=self.project_id,
                zone=zone,
                disk=name,
            )
        except NotFound:
            return None
