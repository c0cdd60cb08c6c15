"""Data models for image references, manifests and statistics."""

import platform as _host_platform
import sys
from dataclasses import dataclass
from typing import Optional, Union

from .utils.digest import validate_digest
from .utils.reference import split_image_reference

# Node-style identifiers mapped to GOARCH / GOOS values
# Reference: https://go.dev/doc/install/source#environment
_ARCHITECTURE_ALIASES = {
    "x64": "amd64",
}
_OS_ALIASES = {
    "win32": "windows",
}
# Only applied when detecting the running interpreter's platform
_HOST_ARCHITECTURE_ALIASES = {
    "x86_64": "amd64",
    "AMD64": "amd64",
    "aarch64": "arm64",
    "ARM64": "arm64",
}


@dataclass(frozen=True)
class ImageReference:
    """A repository plus a tag or digest.

    Reference: https://github.com/opencontainers/distribution-spec/blob/v1.1.1/spec.md#pulling-manifests
    """

    repository: str
    reference: str

    @classmethod
    def from_string(cls, image_ref: str) -> "ImageReference":
        repository, reference = split_image_reference(image_ref)
        return cls(repository, reference)

    def for_reference(self, reference: str) -> "ImageReference":
        """Same repository, different tag or digest."""
        return ImageReference(self.repository, reference)

    @property
    def is_digest(self) -> bool:
        return validate_digest(self.reference)

    def __str__(self) -> str:
        return f"{self.repository}:{self.reference}"


@dataclass(frozen=True)
class Platform:
    """OS / CPU architecture pair in OCI vocabulary.

    Values are not validated: the registry tells us when a platform does not
    exist for an image.
    """

    architecture: str
    os: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "architecture",
            _ARCHITECTURE_ALIASES.get(self.architecture, self.architecture),
        )
        object.__setattr__(self, "os", _OS_ALIASES.get(self.os, self.os))

    @classmethod
    def host(cls) -> "Platform":
        """Platform of the running interpreter."""
        machine = _host_platform.machine()
        return cls(_HOST_ARCHITECTURE_ALIASES.get(machine, machine), sys.platform)

    def __str__(self) -> str:
        return f"{self.os}/{self.architecture}"


@dataclass(frozen=True)
class Descriptor:
    """Content descriptor for a layer or config blob."""

    media_type: str
    size: int
    digest: str


@dataclass(frozen=True)
class ManifestListEntry:
    """One platform variant in a manifest list."""

    digest: str
    platform: Platform
    media_type: Optional[str] = None


@dataclass(frozen=True)
class ManifestList:
    """Image index / manifest list.

    Reference: https://github.com/opencontainers/image-spec/blob/v1.0.1/image-index.md
    """

    manifests: tuple[ManifestListEntry, ...]
    media_type: Optional[str] = None

    def find(self, platform: Platform) -> Optional[ManifestListEntry]:
        """Entry whose architecture and os both match, if any."""
        for entry in self.manifests:
            if (
                entry.platform.architecture == platform.architecture
                and entry.platform.os == platform.os
            ):
                return entry
        return None


@dataclass(frozen=True)
class ImageManifest:
    """Single-platform image manifest.

    Reference: https://github.com/opencontainers/image-spec/blob/v1.0.1/manifest.md
    """

    config: Descriptor
    layers: tuple[Descriptor, ...]
    media_type: Optional[str] = None


Manifest = Union[ManifestList, ImageManifest]


@dataclass(frozen=True)
class ImageStatistics:
    """Storage statistics for one image on one platform.

    Per-layer sizes are stored by layer position. The config blob is kept
    apart from the layers and contributes the same size to both totals.
    """

    reference: ImageReference
    platform: Platform
    layer_compressed_sizes: tuple[int, ...]
    layer_uncompressed_sizes: tuple[int, ...]
    config_size: int

    def __post_init__(self) -> None:
        if len(self.layer_compressed_sizes) != len(self.layer_uncompressed_sizes):
            raise ValueError(
                "Compressed and uncompressed layer sizes must have the same length"
            )

    @property
    def compressed_sizes(self) -> tuple[int, ...]:
        return self.layer_compressed_sizes + (self.config_size,)

    @property
    def uncompressed_sizes(self) -> tuple[int, ...]:
        return self.layer_uncompressed_sizes + (self.config_size,)

    @property
    def total_compressed_size(self) -> int:
        return sum(self.compressed_sizes)

    @property
    def total_uncompressed_size(self) -> int:
        return sum(self.uncompressed_sizes)

    @property
    def total_layers(self) -> int:
        return len(self.layer_compressed_sizes)

    @property
    def space_savings(self) -> float:
        """Fraction of bytes saved by compression."""
        total_uncompressed = self.total_uncompressed_size
        if total_uncompressed == 0:
            return 0.0
        return 1 - self.total_compressed_size / total_uncompressed
