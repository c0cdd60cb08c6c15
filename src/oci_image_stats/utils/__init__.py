"""Utility functions for the OCI image statistics client."""

from .digest import split_digest, validate_digest
from .frames import parse_gzip_trailer, parse_zstd_frame_header
from .reference import split_image_reference
from .tasks import gather_or_cancel

__all__ = [
    "split_digest",
    "validate_digest",
    "parse_gzip_trailer",
    "parse_zstd_frame_header",
    "split_image_reference",
    "gather_or_cancel",
]
