"""Decompressed size lookups from compressed frame headers and trailers.

Both parsers work on the handful of bytes fetched with a range request and
never see the rest of the blob.
"""

import struct

from ..exceptions import ParseError

# Range requests issued for each format
GZIP_TRAILER_RANGE = "bytes=-4"
ZSTD_HEADER_RANGE = "bytes=0-18"

GZIP_TRAILER_SIZE = 4

ZSTD_MAGIC_NUMBER = 0xFD2FB528
ZSTD_FRAME_HEADER_DESCRIPTOR_OFFSET = 4

_FCS_FORMATS = {
    0: "<B",
    1: "<H",
    2: "<I",
    3: "<Q",
}


def parse_gzip_trailer(buffer: bytes) -> int:
    """Read the ISIZE field of a gzip member trailer.

    ISIZE holds the uncompressed length modulo 2^32, so the value is only
    exact for payloads under 4 GiB.

    Reference: http://www.zlib.org/rfc-gzip.html

    Args:
        buffer: Trailing bytes of the blob (at least 4)

    Returns:
        Uncompressed size in bytes

    Raises:
        ParseError: If fewer than 4 bytes are given
    """
    if len(buffer) < GZIP_TRAILER_SIZE:
        raise ParseError(
            f"Gzip trailer needs {GZIP_TRAILER_SIZE} bytes, got {len(buffer)}"
        )
    (size,) = struct.unpack("<I", buffer[-GZIP_TRAILER_SIZE:])
    return size


def zstd_content_size_offset(descriptor: int) -> int:
    """Offset of Frame_Content_Size for a given Frame_Header_Descriptor."""
    single_segment = descriptor & 0b00100000
    dictionary_id_flag = descriptor & 0b00000011
    did_field_size = 4 if dictionary_id_flag == 3 else dictionary_id_flag
    window_descriptor_size = 0 if single_segment else 1
    return (
        ZSTD_FRAME_HEADER_DESCRIPTOR_OFFSET
        + 1
        + did_field_size
        + window_descriptor_size
    )


def parse_zstd_frame_header(buffer: bytes) -> int:
    """Read Frame_Content_Size from a zstd frame header.

    Reference:
    https://github.com/facebook/zstd/blob/dev/doc/zstd_compression_format.md#zstandard-frames

    Args:
        buffer: Leading bytes of the blob

    Returns:
        Declared decompressed size of the frame

    Raises:
        ParseError: If the magic number is wrong, the header is truncated or
            the frame does not declare its content size
    """
    if len(buffer) < ZSTD_FRAME_HEADER_DESCRIPTOR_OFFSET + 1:
        raise ParseError(f"Zstd frame header too short: {len(buffer)} bytes")

    (magic_number,) = struct.unpack_from("<I", buffer, 0)
    if magic_number != ZSTD_MAGIC_NUMBER:
        raise ParseError(f"Invalid magic number: {magic_number:x}")

    descriptor = buffer[ZSTD_FRAME_HEADER_DESCRIPTOR_OFFSET]
    fcs_flag = descriptor >> 6
    single_segment = descriptor & 0b00100000
    offset = zstd_content_size_offset(descriptor)

    if fcs_flag == 0 and not single_segment:
        raise ParseError("Frame content size not available in zstd header")

    fmt = _FCS_FORMATS.get(fcs_flag)
    if fmt is None:
        raise ParseError(f"Invalid value for Frame_Content_Size_flag: {fcs_flag}")

    if len(buffer) < offset + struct.calcsize(fmt):
        raise ParseError(
            f"Zstd frame header truncated: need {offset + struct.calcsize(fmt)} "
            f"bytes, got {len(buffer)}"
        )

    (content_size,) = struct.unpack_from(fmt, buffer, offset)
    if fcs_flag == 1:
        content_size += 256
    return content_size
