# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Property-based tests for the all-zone listing and the by-name lookup.

Property 1: Region Filter Containment
*For any* inventory and region substring, every listed resource's zone
contains the substring, and every record whose zone contains it is listed.

Property 2: Type Filter Exactness
*For any* inventory and type filter, listed resources all have that kind,
and an unknown kind lists nothing.

Property 3: Merge Completeness
*For any* inventory without filters, the listing is exactly the multiset of
normalized records across zones, independent of completion order.

Property 4: Lookup Uniqueness
*For any* placement of a name across zones, the lookup returns at most one
resource per kind, instance first.

Property 5: Creation Date Extraction
*For any* RFC 3339 timestamp, the formatted date is the calendar date in the
timestamp's own offset.
"""

import asyncio
from collections import Counter
from datetime import datetime, timedelta, timezone

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from conftest import FakeComputeClient, build_disk, build_instance
from inventory_server.models import ResourceKind
from inventory_server.services.normalizer import format_creation_timestamp
from inventory_server.services.resource_aggregator import ResourceAggregator
from inventory_server.services.resource_resolver import ResourceResolver
from inventory_server.services.zone_discovery_service import ZoneDiscoveryService


# =============================================================================
# Strategies
# =============================================================================

SAMPLE_ZONES = [
    "us-central1-a", "us-central1-b", "us-east1-b", "us-west1-c",
    "europe-west1-b", "europe-west4-a", "asia-east1-a", "asia-southeast1-b",
]

REGION_SUBSTRINGS = ["us-central1", "us-", "europe", "west", "asia-east1", "-b", "nowhere"]

zone_strategy = st.sampled_from(SAMPLE_ZONES)
name_strategy = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-", min_size=1, max_size=12)
status_strategy = st.sampled_from(["RUNNING", "TERMINATED", "STOPPING", "READY", "FAILED"])

instance_strategy = st.builds(
    lambda name, zone, status, ips: build_instance(name, zone, status=status, nat_ips=tuple(ips)),
    name_strategy,
    zone_strategy,
    status_strategy,
    st.lists(st.ip_addresses(v=4).map(str), max_size=2),
)
disk_strategy = st.builds(
    lambda name, zone, status: build_disk(name, zone, status=status),
    name_strategy,
    zone_strategy,
    status_strategy,
)


@st.composite
def inventory_strategy(draw):
    zones = draw(st.lists(zone_strategy, min_size=1, max_size=6, unique=True))
    instances = draw(st.lists(instance_strategy, max_size=12))
    disks = draw(st.lists(disk_strategy, max_size=12))
    # Only records in discovered zones are reachable
    instances = [i for i in instances if i.zone.split("/")[-1] in zones]
    disks = [d for d in disks if d.zone.split("/")[-1] in zones]
    return FakeComputeClient(zones=zones, instances=instances, disks=disks)


def _list(client, **filters):
    aggregator = ResourceAggregator(
        compute_client=client, zone_discovery=ZoneDiscoveryService(client)
    )
    return asyncio.run(aggregator.list_resources(**filters))


def _key(resource):
    return (resource.name, resource.zone, resource.kind.value, resource.status, resource.ip_addresses)


# =============================================================================
# Property 1: Region Filter Containment
# =============================================================================

class TestRegionFilterProperty:

    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    @given(client=inventory_strategy(), region=st.sampled_from(REGION_SUBSTRINGS))
    def test_region_filter_containment(self, client, region):
        listing = _list(client, region_filter=region)

        assert all(region in r.zone for r in listing.resources)

        expected = sum(
            1 for record in client.instances + client.disks if region in record.zone
        )
        assert len(listing.resources) == expected


# =============================================================================
# Property 2: Type Filter Exactness
# =============================================================================

class TestTypeFilterProperty:

    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    @given(client=inventory_strategy(), kind=st.sampled_from(list(ResourceKind)))
    def test_type_filter_keeps_only_that_kind(self, client, kind):
        listing = _list(client, type_filter=kind.value)

        assert all(r.kind == kind for r in listing.resources)
        records = client.instances if kind == ResourceKind.INSTANCE else client.disks
        assert len(listing.resources) == len(records)

    @settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    @given(
        client=inventory_strategy(),
        unknown=st.text(min_size=1, max_size=10).filter(lambda t: t not in ("instance", "disk")),
    )
    def test_unknown_type_lists_nothing(self, client, unknown):
        assert _list(client, type_filter=unknown).resources == []


# =============================================================================
# Property 3: Merge Completeness
# =============================================================================

class TestMergeProperty:

    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    @given(client=inventory_strategy())
    def test_listing_is_exactly_the_inventory(self, client):
        listing = _list(client)

        expected = Counter(
            (r.name, r.zone.split("/")[-1], kind.value, r.status)
            for kind, records in (
                (ResourceKind.INSTANCE, client.instances),
                (ResourceKind.DISK, client.disks),
            )
            for r in records
        )
        actual = Counter((r.name, r.zone, r.kind.value, r.status) for r in listing.resources)
        assert actual == expected

    @settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    @given(client=inventory_strategy())
    def test_listing_is_stable_across_requests(self, client):
        first = Counter(_key(r) for r in _list(client).resources)
        second = Counter(_key(r) for r in _list(client).resources)
        assert first == second


# =============================================================================
# Property 4: Lookup Uniqueness
# =============================================================================

class TestLookupProperty:

    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    @given(
        zones=st.lists(zone_strategy, min_size=1, max_size=8, unique=True),
        data=st.data(),
    )
    def test_at_most_one_resource_per_kind(self, zones, data):
        instance_zones = data.draw(st.lists(st.sampled_from(zones), max_size=len(zones), unique=True))
        disk_zones = data.draw(st.lists(st.sampled_from(zones), max_size=len(zones), unique=True))
        client = FakeComputeClient(
            zones=zones,
            instances=[build_instance("target", z) for z in instance_zones],
            disks=[build_disk("target", z) for z in disk_zones],
        )
        resolver = ResourceResolver(
            compute_client=client, zone_discovery=ZoneDiscoveryService(client)
        )

        result = asyncio.run(resolver.resolve("target"))

        expected_kinds = []
        if instance_zones:
            expected_kinds.append(ResourceKind.INSTANCE)
        if disk_zones:
            expected_kinds.append(ResourceKind.DISK)
        assert [r.kind for r in result.resources] == expected_kinds

        for resource in result.resources:
            placed = instance_zones if resource.kind == ResourceKind.INSTANCE else disk_zones
            assert resource.zone in placed


# =============================================================================
# Property 5: Creation Date Extraction
# =============================================================================

class TestTimestampProperty:

    @settings(max_examples=200)
    @given(
        moment=st.datetimes(
            min_value=datetime(1970, 1, 1), max_value=datetime(2100, 1, 1)
        ),
        offset_minutes=st.integers(min_value=-12 * 60, max_value=14 * 60),
    )
    def test_date_in_own_offset(self, moment, offset_minutes):
        offset = timezone(timedelta(minutes=offset_minutes))
        stamped = moment.replace(tzinfo=offset)

        assert format_creation_timestamp(stamped.isoformat()) == moment.date().isoformat()
