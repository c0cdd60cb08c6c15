"""OCI Image Stats - Async image size statistics from OCI Distribution registries."""

__version__ = "0.1.0"

from .core.registry_client import RegistryClient
from .core.types import DOCKER_HUB_URL, RegistryConfig
from .exceptions import (
    AuthenticationError,
    ManifestError,
    ParseError,
    PlatformNotFoundError,
    RegistryConnectionError,
    RegistryError,
    RegistryHTTPError,
    UnsupportedMediaTypeError,
)
from .models import (
    Descriptor,
    ImageManifest,
    ImageReference,
    ImageStatistics,
    ManifestList,
    ManifestListEntry,
    Platform,
)
from .stats import collect_image_statistics, get_image_statistics

__all__ = [
    "RegistryClient",
    "RegistryConfig",
    "DOCKER_HUB_URL",
    "collect_image_statistics",
    "get_image_statistics",
    "Descriptor",
    "ImageManifest",
    "ImageReference",
    "ImageStatistics",
    "ManifestList",
    "ManifestListEntry",
    "Platform",
    "RegistryError",
    "RegistryConnectionError",
    "RegistryHTTPError",
    "AuthenticationError",
    "ManifestError",
    "ParseError",
    "PlatformNotFoundError",
    "UnsupportedMediaTypeError",
]
