"""Content digest validation.

Reference: https://github.com/opencontainers/image-spec/blob/v1.0.1/descriptor.md#digests
"""

import re
from typing import Any, Optional

# algorithm ":" encoded
DIGEST_PATTERN = re.compile(r"^([a-z0-9]+(?:[+._-][a-z0-9]+)*):([a-zA-Z0-9=_-]+)$")

# Registered algorithms and the length of their lowercase hex encoding
ENCODED_LENGTHS = {
    "sha256": 64,
    "sha512": 128,
}


def split_digest(digest: Any) -> Optional[tuple[str, str]]:
    """Split a digest into algorithm and encoded parts.

    Returns None if the string does not follow the digest grammar.
    """
    if not isinstance(digest, str):
        return None

    match = DIGEST_PATTERN.match(digest)
    if not match:
        return None

    algorithm, encoded = match.groups()
    return algorithm, encoded


def validate_digest(digest: Any) -> bool:
    """Check a digest uses a registered algorithm with a well-formed hex value.

    Args:
        digest: Candidate digest (e.g., "sha256:b59d...")

    Returns:
        True if the digest can address registry content
    """
    parts = split_digest(digest)
    if parts is None:
        return False

    algorithm, encoded = parts
    expected_length = ENCODED_LENGTHS.get(algorithm)
    if expected_length is None:
        return False

    return len(encoded) == expected_length and all(
        c in "0123456789abcdef" for c in encoded
    )
