"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Optional

import pytest
from google.cloud import compute_v1

from inventory_server.config import Settings
from inventory_server.models.enums import ResourceKind

ZONE_URL_PREFIX = "https://www.googleapis.com/compute/v1/projects/test-project/zones/"


@pytest.fixture
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


# =============================================================================
# Environment and Configuration Fixtures
# =============================================================================

@pytest.fixture
def test_env(monkeypatch):
    """Set up test environment variables."""
    test_vars = {
        "GCP_PROJECT_ID": "test-project",
        "GCP_CREDENTIALS_FILE": "",
        "LOG_LEVEL": "DEBUG",
        "ENVIRONMENT": "test",
    }
    for key, value in test_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("RESOURCE_ID", raising=False)
    return test_vars


@pytest.fixture
def test_settings():
    """Settings for an unpinned server on the test project."""
    return Settings(
        project_id="test-project",
        credentials_file=None,
        environment="test",
        resource_id=None,
    )


# =============================================================================
# Compute Engine record builders
# =============================================================================

def zone_url(zone: str) -> str:
    return ZONE_URL_PREFIX + zone


def build_instance(
    name: str,
    zone: str,
    status: str = "RUNNING",
    nat_ips: tuple = (),
    created: str = "2024-03-18T09:12:44.123-07:00",
) -> compute_v1.Instance:
    """Build an Instance the way the Compute API returns it (zone as a URL)."""
    interfaces = []
    if nat_ips:
        interfaces.append(
            compute_v1.NetworkInterface(
                access_configs=[compute_v1.AccessConfig(nat_i_p=ip) for ip in nat_ips]
            )
        )
    return compute_v1.Instance(
        name=name,
        zone=zone_url(zone),
        status=status,
        network_interfaces=interfaces,
        creation_timestamp=created,
    )


def build_disk(
    name: str,
    zone: str,
    status: str = "READY",
    created: str = "2023-11-02T00:00:00.000-07:00",
) -> compute_v1.Disk:
    """Build a Disk the way the Compute API returns it."""
    return compute_v1.Disk(
        name=name,
        zone=zone_url(zone),
        status=status,
        creation_timestamp=created,
    )


class FakeComputeClient:
    """
    In-memory stand-in for ComputeClient.

    Exposes the same async surface over a fixed inventory. Failures and
    delays can be injected per (zone, kind) to exercise the fan-out.
    """

    def __init__(
        self,
        zones: list[str],
        instances: Optional[list[compute_v1.Instance]] = None,
        disks: Optional[list[compute_v1.Disk]] = None,
    ):
        self.zone_names = list(zones)
        self.instances = list(instances or [])
        self.disks = list(disks or [])
        self.zone_failure: Optional[Exception] = None
        self.failures: dict[tuple[str, ResourceKind], Exception] = {}
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    async def _enter(self, operation: str, zone: str, kind: ResourceKind) -> None:
        self.calls.append((operation, zone))
        delay = self.delays.get(zone)
        if delay:
            await asyncio.sleep(delay)
        failure = self.failures.get((zone, kind))
        if failure is not None:
            raise failure

    @staticmethod
    def _in_zone(records, zone):
        return [r for r in records if r.zone.split("/")[-1] == zone]

    async def list_zones(self) -> list[compute_v1.Zone]:
        self.calls.append(("zones.list", ""))
        if self.zone_failure is not None:
            raise self.zone_failure
        return [compute_v1.Zone(name=name) for name in self.zone_names]

    async def list_instances(self, zone: str) -> list[compute_v1.Instance]:
        await self._enter("instances.list", zone, ResourceKind.INSTANCE)
        return self._in_zone(self.instances, zone)

    async def list_disks(self, zone: str) -> list[compute_v1.Disk]:
        await self._enter("disks.list", zone, ResourceKind.DISK)
        return self._in_zone(self.disks, zone)

    async def get_instance(self, zone: str, name: str) -> Optional[compute_v1.Instance]:
        await self._enter("instances.get", zone, ResourceKind.INSTANCE)
        for record in self._in_zone(self.instances, zone):
            if record.name == name:
                return record
        return None

    async def get_disk(self, zone: str, name: str) -> Optional[compute_v1.Disk]:
        await self._enter("disks.get", zone, ResourceKind.DISK)
        for record in self._in_zone(self.disks, zone):
            if record.name == name:
                return record
        return None

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_instance():
    """Builder for compute_v1.Instance records."""
    return build_instance


@pytest.fixture
def make_disk():
    """Builder for compute_v1.Disk records."""
    return build_disk


@pytest.fixture
def fake_client_factory():
    """The FakeComputeClient class, for tests that build their own inventory."""
    return FakeComputeClient


@pytest.fixture
def sample_compute_client():
    """
    Two-zone inventory: a running instance with one external address in
    us-central1-a and a ready disk in europe-west1-b.
    """
    return FakeComputeClient(
        zones=["us-central1-a", "europe-west1-b"],
        instances=[
            build_instance(
                "web-1",
                "us-central1-a",
                nat_ips=("34.1.2.3",),
                created="2024-03-18T09:12:44.123-07:00",
            )
        ],
        disks=[
            build_disk("data-1", "europe-west1-b", created="2023-11-02T00:00:00.000-07:00")
        ],
    )


# =============================================================================
# Pytest Hooks for Test Reporting
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "property: marks tests as property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests by directory
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "property" in str(item.fspath):
            item.add_marker(pytest.mark.property)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


def pytest_sessionstart(session):
    """Print test session information."""
    print("\n" + "=" * 70)
    print("GCP Resource Inventory Server - Test Suite")
    print("=" * 70)


def pytest_sessionfinish(session, exitstatus):
    """Print test session summary."""
    print("\n" + "=" * 70)
    if exitstatus == 0:
        print("PASS: All tests passed!")
    else:
        print(f"FAIL: Tests failed with exit status: {exitstatus}")
    print("=" * 70)
