"""Media types understood by the statistics client.

Reference: https://github.com/opencontainers/image-spec/blob/v1.0.1/media-types.md
"""

OCI_IMAGE_INDEX = "application/vnd.oci.image.index.v1+json"
OCI_IMAGE_MANIFEST = "application/vnd.oci.image.manifest.v1+json"
OCI_LAYER_TAR = "application/vnd.oci.image.layer.v1.tar"
OCI_LAYER_NONDISTRIBUTABLE_TAR = "application/vnd.oci.image.layer.nondistributable.v1.tar"
OCI_LAYER_TAR_GZIP = "application/vnd.oci.image.layer.v1.tar+gzip"
OCI_LAYER_NONDISTRIBUTABLE_TAR_GZIP = (
    "application/vnd.oci.image.layer.nondistributable.v1.tar+gzip"
)
OCI_LAYER_TAR_ZSTD = "application/vnd.oci.image.layer.v1.tar+zstd"
OCI_LAYER_NONDISTRIBUTABLE_TAR_ZSTD = (
    "application/vnd.oci.image.layer.nondistributable.v1.tar+zstd"
)

# Legacy Docker media types
# https://github.com/distribution/distribution/blob/v2.8.3/docs/spec/manifest-v2-2.md
DOCKER_MANIFEST_V1 = "application/vnd.docker.distribution.manifest.v1+json"
DOCKER_MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"
DOCKER_MANIFEST_LIST_V2 = "application/vnd.docker.distribution.manifest.list.v2+json"
DOCKER_CONTAINER_CONFIG = "application/vnd.docker.container.image.v1+json"
DOCKER_LAYER_TAR_GZIP = "application/vnd.docker.image.rootfs.diff.tar.gzip"
DOCKER_FOREIGN_LAYER_TAR_GZIP = "application/vnd.docker.image.rootfs.foreign.diff.tar.gzip"

UNCOMPRESSED_LAYER_TYPES = frozenset(
    {
        OCI_LAYER_TAR,
        OCI_LAYER_NONDISTRIBUTABLE_TAR,
    }
)

GZIP_LAYER_TYPES = frozenset(
    {
        OCI_LAYER_TAR_GZIP,
        OCI_LAYER_NONDISTRIBUTABLE_TAR_GZIP,
        DOCKER_LAYER_TAR_GZIP,
        DOCKER_FOREIGN_LAYER_TAR_GZIP,
    }
)

ZSTD_LAYER_TYPES = frozenset(
    {
        OCI_LAYER_TAR_ZSTD,
        OCI_LAYER_NONDISTRIBUTABLE_TAR_ZSTD,
    }
)

# Sent as the Accept header on every registry request.
ACCEPTED_MEDIA_TYPES = [
    OCI_IMAGE_INDEX,
    OCI_IMAGE_MANIFEST,
    OCI_LAYER_TAR,
    OCI_LAYER_NONDISTRIBUTABLE_TAR,
    OCI_LAYER_TAR_GZIP,
    OCI_LAYER_NONDISTRIBUTABLE_TAR_GZIP,
    OCI_LAYER_TAR_ZSTD,
    OCI_LAYER_NONDISTRIBUTABLE_TAR_ZSTD,
    DOCKER_MANIFEST_V1,
    DOCKER_MANIFEST_V2,
    DOCKER_MANIFEST_LIST_V2,
    DOCKER_CONTAINER_CONFIG,
    DOCKER_LAYER_TAR_GZIP,
    DOCKER_FOREIGN_LAYER_TAR_GZIP,
]

ACCEPT_HEADER = ",".join(ACCEPTED_MEDIA_TYPES)


def is_uncompressed_layer(media_type: str) -> bool:
    """Check if the layer is stored as a plain tar."""
    return media_type in UNCOMPRESSED_LAYER_TYPES


def is_gzip_layer(media_type: str) -> bool:
    """Check if the layer is a gzip compressed tar."""
    return media_type in GZIP_LAYER_TYPES


def is_zstd_layer(media_type: str) -> bool:
    """Check if the layer is a zstd compressed tar."""
    return media_type in ZSTD_LAYER_TYPES
