"""OCI Distribution async client for image size statistics."""

import json
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import aiohttp

from ..exceptions import (
    AuthenticationError,
    ManifestError,
    PlatformNotFoundError,
    RegistryConnectionError,
    RegistryHTTPError,
    UnsupportedMediaTypeError,
)
from ..models import (
    Descriptor,
    ImageManifest,
    ImageReference,
    ImageStatistics,
    Manifest,
    ManifestList,
    Platform,
)
from ..utils.frames import (
    GZIP_TRAILER_RANGE,
    ZSTD_HEADER_RANGE,
    parse_gzip_trailer,
    parse_zstd_frame_header,
)
from ..utils.manifest import parse_manifest
from ..utils.media_types import (
    ACCEPT_HEADER,
    is_gzip_layer,
    is_uncompressed_layer,
    is_zstd_layer,
)
from ..utils.tasks import gather_or_cancel
from .auth import build_token_params, parse_www_authenticate
from .types import RegistryConfig

logger = logging.getLogger(__name__)


class RegistryClient:
    """Registry client that sizes images from manifests and blob byte ranges."""

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        connector: Optional[aiohttp.BaseConnector] = None,
    ) -> None:
        """Initialize the registry client.

        Args:
            config: Registry configuration (defaults to anonymous Docker Hub)
            connector: aiohttp connector for connection pooling
        """
        self.config = config or RegistryConfig()
        self.registry_url = self.config.url
        self.connector = connector
        self.session: Optional[aiohttp.ClientSession] = None
        self._authorization = self.config.authorization

    async def __aenter__(self) -> "RegistryClient":
        """Enter async context manager."""
        if not self.session:
            self.session = aiohttp.ClientSession(
                connector=self.connector,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the client session."""
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def authorization(self) -> Optional[str]:
        """Authorization header value sent with registry requests, if any."""
        return self._authorization

    def _trace(self, url: str, authorized: bool, status: int) -> None:
        level = logging.INFO if self.config.debug else logging.DEBUG
        logger.log(
            level,
            f"Request url={url}, auth={'yes' if authorized else 'no'}, "
            f"response status={status}",
        )

    async def _fetch(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[List[Tuple[str, str]]] = None,
        raise_for_status: bool = True,
    ) -> Tuple[int, Mapping[str, str], bytes]:
        """GET a URL and read the whole body.

        Returns:
            Status code, response headers and body

        Raises:
            RegistryConnectionError: If the request cannot be sent
            RegistryHTTPError: If raise_for_status is set and the status is
                not 2xx
        """
        if self.session is None:
            raise RegistryConnectionError(
                "Client session is not open; use 'async with RegistryClient(...)'"
            )

        headers = headers or {}
        try:
            async with self.session.get(url, headers=headers, params=params) as resp:
                body = await resp.read()
                status = resp.status
                response_headers = resp.headers
        except aiohttp.ClientError as e:
            raise RegistryConnectionError(f"Request to {url} failed: {e}") from e

        self._trace(url, "Authorization" in headers, status)

        if raise_for_status and not 200 <= status < 300:
            raise RegistryHTTPError(status, url)

        return status, response_headers, body

    async def request(
        self, url_path: str, headers: Optional[Dict[str, str]] = None
    ) -> bytes:
        """Authenticated GET against the registry API.

        Args:
            url_path: Path below the registry URL (e.g., /v2/library/ubuntu/manifests/latest)
            headers: Extra request headers

        Returns:
            Response body
        """
        request_headers = dict(headers or {})
        if self._authorization:
            request_headers["Authorization"] = self._authorization
        request_headers["Accept"] = ACCEPT_HEADER

        _, _, body = await self._fetch(
            f"{self.registry_url}{url_path}", headers=request_headers
        )
        return body

    async def try_authenticate(
        self, references: Iterable[ImageReference]
    ) -> Optional[str]:
        """Obtain a pull token covering every repository in references.

        A credential supplied through the configuration is used as is. Otherwise
        the registry is queried at /v2/ and, if it answers with a bearer
        challenge, a token is requested from the challenge realm. Registries
        that allow anonymous pulls, or whose challenge cannot be parsed, are
        used without credentials.

        Reference: https://docs.docker.com/docker-hub/usage/pulls/#view-pull-rate-and-limit

        Args:
            references: Image references that will be queried

        Returns:
            Authorization header value, or None when proceeding anonymously

        Raises:
            RegistryHTTPError: If the token request fails
            AuthenticationError: If the token response carries no token
        """
        if self._authorization:
            return self._authorization

        status, headers, _ = await self._fetch(
            f"{self.registry_url}/v2/", raise_for_status=False
        )
        if status != 401:
            logger.debug(f"Registry {self.registry_url} allows anonymous access")
            return None

        challenge = parse_www_authenticate(headers.get("WWW-Authenticate"))
        if challenge is None:
            logger.warning(
                f"Failed to parse WWW-Authenticate for {self.registry_url}, "
                "continuing without credentials"
            )
            return None

        _, _, body = await self._fetch(
            challenge.realm, params=build_token_params(challenge, references)
        )
        try:
            data = json.loads(body)
        except ValueError as e:
            raise AuthenticationError(
                f"Invalid token response from {challenge.realm}: {e}"
            ) from e

        token = None
        if isinstance(data, dict):
            token = data.get("token") or data.get("access_token")
        if not token:
            raise AuthenticationError(f"No token in response from {challenge.realm}")

        self._authorization = challenge.credential(token)
        logger.debug(f"Authenticated against {self.registry_url} via {challenge.realm}")
        return self._authorization

    async def get_manifest(self, reference: ImageReference) -> Manifest:
        """Retrieve a manifest or manifest list from the registry.

        Reference: https://github.com/opencontainers/distribution-spec/blob/v1.1.1/spec.md#pulling-manifests

        Args:
            reference: Repository and tag or digest

        Returns:
            ManifestList or ImageManifest

        Raises:
            RegistryHTTPError: If retrieval fails
            ManifestError: If the document is malformed
        """
        body = await self.request(
            f"/v2/{reference.repository}/manifests/{reference.reference}"
        )
        try:
            document = json.loads(body)
        except ValueError as e:
            raise ManifestError(f"Invalid manifest JSON for {reference}: {e}") from e
        return parse_manifest(document)

    async def get_blob(
        self, reference: ImageReference, headers: Optional[Dict[str, str]] = None
    ) -> bytes:
        """Retrieve a blob, or part of it when a Range header is given.

        Reference: https://github.com/opencontainers/distribution-spec/blob/v1.1.1/spec.md#pulling-blobs

        Args:
            reference: Repository and blob digest
            headers: Extra request headers (e.g., {"Range": "bytes=-4"})

        Returns:
            Blob bytes

        Raises:
            RegistryHTTPError: If retrieval fails
        """
        return await self.request(
            f"/v2/{reference.repository}/blobs/{reference.reference}", headers
        )

    async def uncompressed_size(
        self, reference: ImageReference, layer: Descriptor
    ) -> int:
        """Infer a layer's uncompressed size from its media type and a few bytes.

        Args:
            reference: Any reference in the layer's repository
            layer: Layer descriptor from the image manifest

        Returns:
            Uncompressed size in bytes

        Raises:
            UnsupportedMediaTypeError: If the media type is not a known layer type
            ParseError: If the fetched bytes cannot be parsed
        """
        if is_uncompressed_layer(layer.media_type):
            return layer.size

        if is_gzip_layer(layer.media_type):
            buffer = await self.get_blob(
                reference.for_reference(layer.digest), {"Range": GZIP_TRAILER_RANGE}
            )
            return parse_gzip_trailer(buffer)

        if is_zstd_layer(layer.media_type):
            buffer = await self.get_blob(
                reference.for_reference(layer.digest), {"Range": ZSTD_HEADER_RANGE}
            )
            return parse_zstd_frame_header(buffer)

        raise UnsupportedMediaTypeError(layer.media_type)

    async def get_image_statistics(
        self, platform: Platform, reference: ImageReference
    ) -> ImageStatistics:
        """Compute storage statistics for one image on one platform.

        Args:
            platform: Requested OS / architecture
            reference: Image whose manifest list is resolved

        Returns:
            Finished ImageStatistics

        Raises:
            ManifestError: If the reference does not resolve to a manifest list
            PlatformNotFoundError: If no list entry matches the platform
        """
        manifest_list = await self.get_manifest(reference)
        # TODO: size single-platform images by taking the ImageManifest branch directly
        if not isinstance(manifest_list, ManifestList):
            raise ManifestError(f"Expected a manifest list for {reference}")

        entry = manifest_list.find(platform)
        if entry is None:
            raise PlatformNotFoundError(
                f"Failed to find manifest for os {platform.os} and architecture "
                f"{platform.architecture} for image {reference}"
            )
        kind = "digest" if reference.is_digest else "tag"
        logger.debug(f"Resolved {kind} {reference} for {platform} to {entry.digest}")

        manifest = await self.get_manifest(reference.for_reference(entry.digest))
        if not isinstance(manifest, ImageManifest):
            raise ManifestError(f"Expected an image manifest at {entry.digest}")

        async def lookup(index: int, layer: Descriptor) -> Tuple[int, int]:
            return index, await self.uncompressed_size(reference, layer)

        uncompressed_sizes = [0] * len(manifest.layers)
        results = await gather_or_cancel(
            lookup(index, layer) for index, layer in enumerate(manifest.layers)
        )
        for index, size in results:
            uncompressed_sizes[index] = size

        return ImageStatistics(
            reference=reference,
            platform=platform,
            layer_compressed_sizes=tuple(layer.size for layer in manifest.layers),
            layer_uncompressed_sizes=tuple(uncompressed_sizes),
            config_size=manifest.config.size,
        )
