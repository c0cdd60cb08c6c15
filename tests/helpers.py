"""In-process fake OCI registry for client tests."""

import asyncio
import hashlib
import json
import struct
from typing import Optional

from aiohttp import web
from aiohttp.test_utils import TestServer

from oci_image_stats.utils.media_types import (
    DOCKER_CONTAINER_CONFIG,
    OCI_IMAGE_INDEX,
    OCI_IMAGE_MANIFEST,
)

ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


def calculate_digest(data: bytes) -> str:
    return f"sha256:{hashlib.sha256(data).hexdigest()}"


def zstd_frame(content_size: int, descriptor: int = 0b10100000) -> bytes:
    """Zstd frame header declaring content_size, followed by filler bytes.

    The default descriptor is single segment with a 4-byte content size.
    """
    return ZSTD_MAGIC + bytes([descriptor]) + struct.pack("<I", content_size) + b"\x00" * 32


class FakeRegistry:
    """Minimal registry serving manifests and blobs, with optional bearer auth."""

    def __init__(
        self,
        require_auth: bool = False,
        scheme: str = "Bearer",
        token: str = "test-token",
        challenge: Optional[str] = None,
        honor_range: bool = True,
    ) -> None:
        self.require_auth = require_auth
        self.scheme = scheme
        self.token = token
        self.challenge = challenge
        self.honor_range = honor_range

        self.manifests: dict[tuple[str, str], bytes] = {}
        self.blobs: dict[tuple[str, str], bytes] = {}
        self.blob_delays: dict[str, float] = {}
        self.manifest_delays: dict[str, float] = {}

        self.token_queries: list[list[tuple[str, str]]] = []
        self.requests: list[dict[str, Optional[str]]] = []

        self.app = web.Application()
        self.app.router.add_get("/v2/", self.handle_base)
        self.app.router.add_get("/token", self.handle_token)
        self.app.router.add_get(
            "/v2/{repository:.+}/manifests/{reference}", self.handle_manifest
        )
        self.app.router.add_get("/v2/{repository:.+}/blobs/{digest}", self.handle_blob)
        self.server: Optional[TestServer] = None

    async def start(self) -> None:
        self.server = TestServer(self.app)
        await self.server.start_server()

    async def close(self) -> None:
        if self.server:
            await self.server.close()

    @property
    def url(self) -> str:
        return str(self.server.make_url("/")).rstrip("/")

    @property
    def credential(self) -> str:
        return f"{self.scheme} {self.token}"

    def blob_requests(self) -> list[dict[str, Optional[str]]]:
        return [r for r in self.requests if "/blobs/" in r["path"]]

    # Content setup

    def add_blob(self, repository: str, data: bytes) -> str:
        digest = calculate_digest(data)
        self.blobs[(repository, digest)] = data
        return digest

    def add_manifest(
        self, repository: str, document: dict, tag: Optional[str] = None
    ) -> str:
        body = json.dumps(document).encode("utf-8")
        digest = calculate_digest(body)
        self.manifests[(repository, digest)] = body
        if tag:
            self.manifests[(repository, tag)] = body
        return digest

    def add_image(
        self,
        repository: str,
        tag: str,
        layers: list[tuple[str, bytes]],
        config: bytes = b'{"architecture":"amd64","os":"linux"}',
        platforms: tuple[tuple[str, str], ...] = (("amd64", "linux"),),
    ) -> dict:
        """Publish a manifest list under tag with one image manifest per platform.

        Returns:
            The image manifest document that was published
        """
        config_digest = self.add_blob(repository, config)
        layer_descriptors = [
            {
                "mediaType": media_type,
                "size": len(data),
                "digest": self.add_blob(repository, data),
            }
            for media_type, data in layers
        ]
        image_manifest = {
            "schemaVersion": 2,
            "mediaType": OCI_IMAGE_MANIFEST,
            "config": {
                "mediaType": DOCKER_CONTAINER_CONFIG,
                "size": len(config),
                "digest": config_digest,
            },
            "layers": layer_descriptors,
        }
        manifest_digest = self.add_manifest(repository, image_manifest)

        index = {
            "schemaVersion": 2,
            "mediaType": OCI_IMAGE_INDEX,
            "manifests": [
                {
                    "mediaType": OCI_IMAGE_MANIFEST,
                    "digest": manifest_digest,
                    "size": 0,
                    "platform": {"architecture": architecture, "os": os},
                }
                for architecture, os in platforms
            ],
        }
        self.add_manifest(repository, index, tag=tag)
        return image_manifest

    # Handlers

    def _record(self, request: web.Request) -> None:
        self.requests.append(
            {
                "path": request.path,
                "range": request.headers.get("Range"),
                "authorization": request.headers.get("Authorization"),
                "accept": request.headers.get("Accept"),
            }
        )

    def _challenge(self, request: web.Request) -> str:
        if self.challenge is not None:
            return self.challenge
        realm = f"{request.url.origin()}/token"
        return f'{self.scheme} realm="{realm}",service="fake-registry"'

    def _unauthorized(self, request: web.Request) -> Optional[web.Response]:
        if not self.require_auth:
            return None
        if request.headers.get("Authorization") == self.credential:
            return None
        return web.json_response(
            {"errors": [{"code": "UNAUTHORIZED"}]},
            status=401,
            headers={"WWW-Authenticate": self._challenge(request)},
        )

    async def handle_base(self, request: web.Request) -> web.Response:
        self._record(request)
        denied = self._unauthorized(request)
        if denied is not None:
            return denied
        return web.json_response({})

    async def handle_token(self, request: web.Request) -> web.Response:
        self.token_queries.append(list(request.query.items()))
        return web.json_response({"token": self.token})

    async def handle_manifest(self, request: web.Request) -> web.Response:
        self._record(request)
        denied = self._unauthorized(request)
        if denied is not None:
            return denied

        repository = request.match_info["repository"]
        await asyncio.sleep(self.manifest_delays.get(repository, 0))
        body = self.manifests.get((repository, request.match_info["reference"]))
        if body is None:
            return web.json_response({"errors": [{"code": "MANIFEST_UNKNOWN"}]}, status=404)

        media_type = json.loads(body).get("mediaType", "application/json")
        return web.Response(body=body, content_type=media_type)

    async def handle_blob(self, request: web.Request) -> web.Response:
        self._record(request)
        denied = self._unauthorized(request)
        if denied is not None:
            return denied

        digest = request.match_info["digest"]
        data = self.blobs.get((request.match_info["repository"], digest))
        if data is None:
            return web.json_response({"errors": [{"code": "BLOB_UNKNOWN"}]}, status=404)

        await asyncio.sleep(self.blob_delays.get(digest, 0))

        byte_range = request.headers.get("Range")
        if not byte_range or not self.honor_range:
            return web.Response(body=data, content_type="application/octet-stream")

        start, _, end = byte_range.removeprefix("bytes=").partition("-")
        if not start:
            chunk = data[-int(end):]
            first = len(data) - len(chunk)
        else:
            first = int(start)
            chunk = data[first : int(end) + 1] if end else data[first:]
        return web.Response(
            body=chunk,
            status=206,
            content_type="application/octet-stream",
            headers={
                "Content-Range": f"bytes {first}-{first + len(chunk) - 1}/{len(data)}"
            },
        )
