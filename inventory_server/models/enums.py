"""Enumerations for resource kinds."""

from enum import Enum


class ResourceKind(str, Enum):
    """Kinds of Compute Engine resources in the inventory."""

    INSTANCE = "instance"
    DISK = "disk"
