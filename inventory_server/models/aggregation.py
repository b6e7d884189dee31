# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Multi-zone fan-out result models.

This module contains Pydantic models for the results of the parallel
zone listing and the single-resource lookup, including the per-zone
failures that were absorbed along the way.
"""

from pydantic import BaseModel, Field

from .enums import ResourceKind
from .resource import Resource


class ZoneError(BaseModel):
    """A failure on one (zone, kind) probe that was absorbed.

    The fan-out prefers a possibly incomplete answer over failing the
    whole request, so these never change the HTTP status; they are kept
    for logging and diagnostics.
    """

    zone: str = Field(..., description="Zone name the probe targeted")
    kind: ResourceKind | None = Field(
        default=None,
        description="Resource kind probed (None when the whole zone task was cut short)",
    )
    message: str = Field(..., description="Error description")


class ResourceListing(BaseModel):
    """Aggregated listing across all zones of a project."""

    resources: list[Resource] = Field(
        default_factory=list,
        description="Resources that passed the filters, in completion order",
    )
    zones_queried: list[str] = Field(
        default_factory=list,
        description="Zones returned by zone discovery",
    )
    zone_errors: list[ZoneError] = Field(
        default_factory=list,
        description="Per-zone failures treated as zero results",
    )
    timed_out: bool = Field(
        default=False,
        description="Whether the request deadline cut the fan-out short",
    )


class ResolutionResult(BaseModel):
    """Outcome of looking up one resource name in every zone."""

    resource_id: str = Field(..., description="Resource name that was looked up")
    resources: list[Resource] = Field(
        default_factory=list,
        description="At most one match per kind, instance before disk",
    )
    zone_errors: list[ZoneError] = Field(
        default_factory=list,
        description="Probe failures other than not-found",
    )
    timed_out: bool = Field(
        default=False,
        description="Whether the request deadline cut the probes short",
    )

    @property
    def found(self) -> bool:
        """True when at least one kind produced a match."""
        return bool(self.resources)
