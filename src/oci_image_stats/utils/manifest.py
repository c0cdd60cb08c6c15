"""Manifest document parsing.

Registry responses are turned into ``ManifestList`` or ``ImageManifest``
values here so the rest of the client never touches raw JSON.
"""

from typing import Any

from ..exceptions import ManifestError
from ..models import (
    Descriptor,
    ImageManifest,
    Manifest,
    ManifestList,
    ManifestListEntry,
    Platform,
)
from .digest import validate_digest


def is_manifest_list(document: dict[str, Any]) -> bool:
    """Check if document enumerates platform manifests."""
    return "manifests" in document


def is_image_manifest(document: dict[str, Any]) -> bool:
    """Check if document lists a config and layers."""
    return "layers" in document and "config" in document


def has_required_fields(entry: Any, required_fields: list[str]) -> bool:
    """Check if entry is a mapping with all required fields."""
    return isinstance(entry, dict) and all(field in entry for field in required_fields)


def parse_descriptor(entry: Any) -> Descriptor:
    """Parse a layer or config descriptor."""
    if not has_required_fields(entry, ["size", "digest"]):
        raise ManifestError(f"Invalid descriptor: {entry!r}")

    size = entry["size"]
    if not isinstance(size, int) or isinstance(size, bool) or size < 0:
        raise ManifestError(f"Invalid descriptor size: {size!r}")

    digest = entry["digest"]
    if not validate_digest(digest):
        raise ManifestError(f"Invalid descriptor digest: {digest!r}")

    return Descriptor(
        media_type=entry.get("mediaType", ""),
        size=size,
        digest=digest,
    )


def parse_manifest_list_entry(entry: Any) -> ManifestListEntry:
    """Parse one entry of a manifest list's ``manifests`` array."""
    if not has_required_fields(entry, ["digest", "platform"]):
        raise ManifestError(f"Invalid manifest list entry: {entry!r}")

    platform = entry["platform"]
    if not has_required_fields(platform, ["architecture", "os"]):
        raise ManifestError(f"Invalid platform in manifest list entry: {platform!r}")

    digest = entry["digest"]
    if not validate_digest(digest):
        raise ManifestError(f"Invalid manifest list entry digest: {digest!r}")

    return ManifestListEntry(
        digest=digest,
        platform=Platform(platform["architecture"], platform["os"]),
        media_type=entry.get("mediaType"),
    )


def parse_manifest_list(document: dict[str, Any]) -> ManifestList:
    """Parse an image index / manifest list document."""
    manifests = document["manifests"]
    if not isinstance(manifests, list):
        raise ManifestError("Manifest list 'manifests' must be a list")

    return ManifestList(
        manifests=tuple(parse_manifest_list_entry(entry) for entry in manifests),
        media_type=document.get("mediaType"),
    )


def parse_image_manifest(document: dict[str, Any]) -> ImageManifest:
    """Parse a single-platform image manifest document."""
    layers = document["layers"]
    if not isinstance(layers, list):
        raise ManifestError("Image manifest 'layers' must be a list")

    return ImageManifest(
        config=parse_descriptor(document["config"]),
        layers=tuple(parse_descriptor(layer) for layer in layers),
        media_type=document.get("mediaType"),
    )


def parse_manifest(document: Any) -> Manifest:
    """Parse a registry manifest response into its tagged variant.

    Args:
        document: Decoded JSON body of a manifest response

    Returns:
        ManifestList or ImageManifest

    Raises:
        ManifestError: If the document is neither, or is malformed
    """
    if not isinstance(document, dict):
        raise ManifestError("Manifest document must be a JSON object")

    if is_manifest_list(document):
        return parse_manifest_list(document)

    if is_image_manifest(document):
        return parse_image_manifest(document)

    raise ManifestError(
        f"Unrecognized manifest document (mediaType={document.get('mediaType')!r})"
    )
