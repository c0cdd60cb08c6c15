"""Real integration tests with public registries."""

import pytest

pytestmark = pytest.mark.integration  # Mark all tests in this file as integration

from oci_image_stats import (
    DOCKER_HUB_URL,
    ImageReference,
    Platform,
    RegistryClient,
    RegistryConfig,
)

LINUX_AMD64 = Platform("amd64", "linux")


@pytest.mark.asyncio
async def test_docker_hub_image_statistics():
    """Test stats for a pinned ubuntu image on Docker Hub."""
    reference = ImageReference(
        "library/ubuntu",
        "sha256:b59d21599a2b151e23eea5f6602f4af4d7d31c4e236d22bf0b62b86d2e386b8f",
    )

    async with RegistryClient(RegistryConfig(url=DOCKER_HUB_URL)) as client:
        await client.try_authenticate([reference])
        stats = await client.get_image_statistics(LINUX_AMD64, reference)

    assert stats.total_layers == 1
    assert stats.total_uncompressed_size == 80626935
    assert stats.total_compressed_size == 29717632
    assert round(stats.space_savings, 2) == 0.63


@pytest.mark.asyncio
async def test_mcr_image_statistics():
    """Test stats for devcontainers/base 1.2.4-ubuntu-24.04 on mcr.microsoft.com."""
    reference = ImageReference(
        "devcontainers/base",
        "sha256:4c8b0c0465d6452808c2c97920da968fee7a128ba3bcdf2c79e2b6684c9b65dc",
    )

    async with RegistryClient(RegistryConfig(url="https://mcr.microsoft.com")) as client:
        await client.try_authenticate([reference])
        stats = await client.get_image_statistics(LINUX_AMD64, reference)

    assert stats.total_layers == 9
    assert stats.total_uncompressed_size == 768075090
    assert stats.total_compressed_size == 295935442
    assert round(stats.space_savings, 2) == 0.61
