"""Command line front end: ``oci-image-stats stats IMAGE [IMAGE ...]``."""

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from .core.types import RegistryConfig
from .exceptions import RegistryError
from .formatting import render_table, statistics_row
from .models import ImageReference, Platform
from .stats import collect_image_statistics

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    host = Platform.host()
    p = argparse.ArgumentParser(
        prog="oci-image-stats",
        description="Show compressed and uncompressed sizes of registry images "
        "without pulling them.",
    )
    p.add_argument(
        "command",
        choices=["stats"],
        help="Subcommand to run",
    )
    p.add_argument(
        "images",
        nargs="+",
        metavar="IMAGE",
        help="Image reference (repository[:tag])",
    )
    p.add_argument(
        "--registry",
        default=None,
        help="Registry URL (default: $OCI_IMAGE_STATS_REGISTRY or Docker Hub)",
    )
    p.add_argument(
        "--arch",
        default=host.architecture,
        help=f"CPU architecture (default: {host.architecture})",
    )
    p.add_argument(
        "--os",
        default=host.os,
        help=f"Operating system (default: {host.os})",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Total timeout per request in seconds (default: none)",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Log every registry request",
    )
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = RegistryConfig.from_env(
        url=args.registry, timeout=args.timeout, debug=args.debug
    )
    platform = Platform(args.arch, args.os)

    try:
        references = [ImageReference.from_string(image) for image in args.images]
        results = asyncio.run(collect_image_statistics(config, platform, references))
    except RegistryError as e:
        logger.error(f"Failed to compute image statistics: {e}")
        return 1

    print(render_table([statistics_row(stats) for stats in results]))
    return 0
