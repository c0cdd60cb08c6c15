"""Test configuration and fixtures."""

import os

import pytest
import pytest_asyncio

from oci_image_stats import RegistryClient, RegistryConfig
from tests.helpers import FakeRegistry


@pytest_asyncio.fixture
async def fake_registry():
    """Anonymous fake registry."""
    registry = FakeRegistry()
    await registry.start()
    yield registry
    await registry.close()


@pytest_asyncio.fixture
async def auth_registry():
    """Fake registry that requires a bearer token."""
    registry = FakeRegistry(require_auth=True)
    await registry.start()
    yield registry
    await registry.close()


@pytest_asyncio.fixture
async def client(fake_registry):
    """Client bound to the anonymous fake registry."""
    async with RegistryClient(RegistryConfig(url=fake_registry.url)) as registry_client:
        yield registry_client


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers and settings."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring a public registry"
    )
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection."""
    # Skip integration tests unless a public registry is reachable
    skip_integration = pytest.mark.skip(reason="Registry not available")

    for item in items:
        if (
            "integration" in item.keywords
            and os.getenv("REGISTRY_AVAILABLE", "false").lower() != "true"
        ):
            item.add_marker(skip_integration)
