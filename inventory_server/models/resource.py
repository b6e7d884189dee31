"""Canonical Compute Engine resource model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

from .enums import ResourceKind

# Stand-in creation date when the provider timestamp cannot be parsed
TIMESTAMP_UNAVAILABLE = "N/A"


class Resource(BaseModel):
    """A VM instance or persistent disk, flattened to one kind-agnostic shape.

    Built fresh from live provider data for each request and never mutated
    afterwards. ``ip_addresses`` is always empty for disks and is left out of
    the serialized form when empty.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "web-1",
                "zone": "us-central1-a",
                "type": "instance",
                "status": "RUNNING",
                "ipAddresses": ["34.123.45.67"],
                "creationTimestamp": "2024-03-18",
            }
        },
    )

    name: str = Field(..., description="Resource name, unique within its zone and kind")
    zone: str = Field(..., description="Short zone name (e.g. us-central1-a)")
    kind: ResourceKind = Field(..., alias="type", description="Resource kind")
    status: str = Field(..., description="Provider lifecycle state, passed through verbatim")
    ip_addresses: tuple[str, ...] = Field(
        default=(),
        alias="ipAddresses",
        description="External addresses from the instance's access configurations",
    )
    creation_timestamp: str = Field(
        ...,
        alias="creationTimestamp",
        description="Creation date as YYYY-MM-DD, or N/A when unparseable",
    )

    @model_serializer(mode="wrap")
    def _omit_empty_addresses(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if not self.ip_addresses:
            data.pop("ipAddresses", None)
            data.pop("ip_addresses", None)
        return data
