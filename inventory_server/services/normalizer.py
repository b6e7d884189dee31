"""
Normalization of Compute Engine records into the canonical Resource shape.

These functions are side-effect free apart from a warning log for
unparseable timestamps, and know nothing about request filters; the
aggregator decides what to include and only then normalizes it.
"""

import logging
import re
from datetime import datetime
from typing import Any, Iterable, Optional

from ..models.enums import ResourceKind
from ..models.resource import TIMESTAMP_UNAVAILABLE, Resource

logger = logging.getLogger(__name__)

# RFC 3339 date-time: mandatory "T" separator and explicit offset
RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})$"
)


def extract_zone_name(zone_url: str) -> str:
    """
    Extract the short zone name from a zone URL.

    Compute Engine reports zones as full URLs, e.g.
    ``https://www.googleapis.com/compute/v1/projects/p/zones/us-central1-a``.

    Args:
        zone_url: Zone URL or bare zone name

    Returns:
        The last ``/``-delimited segment
    """
    return zone_url.split("/")[-1]


def extract_external_addresses(network_interfaces: Iterable[Any]) -> list[str]:
    """
    Collect the external addresses of an instance's network interfaces.

    Only access configurations with a non-empty NAT IP contribute; an
    interface with internal addressing only contributes nothing.

    Args:
        network_interfaces: compute_v1.NetworkInterface records

    Returns:
        External addresses in encounter order
    """
    addresses = []
    for interface in network_interfaces or []:
        for access_config in interface.access_configs or []:
            if access_config.nat_i_p:
                addresses.append(access_config.nat_i_p)
    return addresses


def format_creation_timestamp(timestamp: str) -> str:
    """
    Reduce an RFC 3339 timestamp to its calendar date.

    The date is taken in the timestamp's own UTC offset. An unparseable
    value degrades to ``N/A`` with a warning instead of failing the
    record.

    Args:
        timestamp: Provider creation timestamp

    Returns:
        ``YYYY-MM-DD`` or ``N/A``
    """
    if timestamp and RFC3339_PATTERN.match(timestamp):
        try:
            return datetime.fromisoformat(timestamp).date().isoformat()
        except ValueError:
            pass

    logger.warning(f"Error parsing creation timestamp: {timestamp!r}")
    return TIMESTAMP_UNAVAILABLE


def matches_filters(
    raw_zone: str,
    kind: ResourceKind,
    region_filter: Optional[str] = None,
    type_filter: Optional[str] = None,
) -> bool:
    """
    Decide whether a candidate record belongs in a listing.

    The region filter is a substring match against the unstripped zone
    string, so ``us-central1`` selects every ``us-central1-*`` zone. The
    type filter must equal the kind name exactly. Both must pass.

    Args:
        raw_zone: Zone field exactly as the provider returned it
        kind: Kind of the candidate record
        region_filter: Optional region substring
        type_filter: Optional kind name

    Returns:
        True if the record passes both filters
    """
    if region_filter and region_filter not in raw_zone:
        return False
    if type_filter and type_filter != kind.value:
        return False
    return True


def normalize_instance(instance: Any) -> Resource:
    """
    Map a compute_v1.Instance to a Resource.

    Args:
        instance: Instance record

    Returns:
        Resource of kind instance
    """
    return Resource(
        name=instance.name,
        zone=extract_zone_name(instance.zone),
        kind=ResourceKind.INSTANCE,
        status=instance.status,
        ip_addresses=extract_external_addresses(instance.network_interfaces),
        creation_timestamp=format_creation_timestamp(instance.creation_timestamp),
    )


def normalize_disk(disk: Any) -> Resource:
    """
    Map a compute_v1.Disk to a Resource.

    Args:
        disk: Disk record

    Returns:
        Resource of kind disk, without addresses
    """
    return Resource(
        name=disk.name,
        zone=extract_zone_name(disk.zone),
        kind=ResourceKind.DISK,
        status=disk.status,
        creation_timestamp=format_creation_timestamp(disk.creation_timestamp),
    )


NORMALIZERS = {
    ResourceKind.INSTANCE: normalize_instance,
    ResourceKind.DISK: normalize_disk,
}
