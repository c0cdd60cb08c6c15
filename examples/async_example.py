"""Example usage of async image statistics client."""

import asyncio
import logging
import sys

# Add parent directory to path
sys.path.insert(0, "src")

from oci_image_stats import (
    ImageReference,
    Platform,
    RegistryConfig,
    RegistryError,
    collect_image_statistics,
    get_image_statistics,
)
from oci_image_stats.formatting import format_bytes, render_table, statistics_row

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Example single image lookup."""
    try:
        logger.info("Computing statistics for library/ubuntu:24.04...")
        stats = await get_image_statistics(
            "library/ubuntu:24.04", architecture="amd64", os="linux"
        )
        logger.info(f"Layers: {stats.total_layers}")
        logger.info(f"Compressed: {format_bytes(stats.total_compressed_size)}")
        logger.info(f"Uncompressed: {format_bytes(stats.total_uncompressed_size)}")
        logger.info(f"Space savings: {stats.space_savings:.2%}")

    except RegistryError as e:
        logger.error(f"Registry error: {e}")


async def concurrent_operations():
    """Example of several images fetched concurrently with one token."""
    config = RegistryConfig.from_env()
    references = [
        ImageReference.from_string(image)
        for image in ("library/ubuntu:24.04", "library/debian:12", "library/alpine")
    ]

    try:
        logger.info(f"Fetching {len(references)} images from {config.url}...")
        results = await collect_image_statistics(config, Platform.host(), references)
        print(render_table([statistics_row(stats) for stats in results]))

    except RegistryError as e:
        logger.error(f"Registry error: {e}")


if __name__ == "__main__":
    print("=== Single Image ===")
    asyncio.run(main())

    print("\n=== Concurrent Images ===")
    asyncio.run(concurrent_operations())
