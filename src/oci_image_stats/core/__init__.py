"""Registry client core: configuration, authentication and the client itself."""

from .registry_client import RegistryClient
from .types import DOCKER_HUB_URL, RegistryConfig

__all__ = ["RegistryClient", "RegistryConfig", "DOCKER_HUB_URL"]
