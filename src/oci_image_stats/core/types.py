"""Configuration types for the registry client."""

import os
from dataclasses import dataclass
from typing import Optional

# Source: https://github.com/moby/moby/blob/59bdc72463bbbf236f9113e0c1fb2f95a1fbb6e5/registry/config.go#L39-L45
DOCKER_HUB_URL = "https://registry-1.docker.io"

AUTHORIZATION_ENV = "AUTHORIZATION"
REGISTRY_ENV = "OCI_IMAGE_STATS_REGISTRY"


@dataclass(frozen=True)
class RegistryConfig:
    """Registry client configuration.

    Attributes:
        url: Registry base URL (e.g., https://registry-1.docker.io)
        authorization: Full Authorization header value, if known up front
        timeout: Total request timeout in seconds, None to wait forever
        debug: Log every request at INFO instead of DEBUG
    """

    url: str = DOCKER_HUB_URL
    authorization: Optional[str] = None
    timeout: Optional[float] = None
    debug: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", self.url.rstrip("/"))

    @classmethod
    def from_env(
        cls,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        debug: bool = False,
    ) -> "RegistryConfig":
        """Build a config, filling the registry and credential from the environment."""
        return cls(
            url=url or os.getenv(REGISTRY_ENV, DOCKER_HUB_URL),
            authorization=os.getenv(AUTHORIZATION_ENV) or None,
            timeout=timeout,
            debug=debug,
        )
