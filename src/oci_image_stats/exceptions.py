"""Custom exceptions for the OCI image statistics client."""


class RegistryError(Exception):
    """Base exception for all registry-related errors."""

    pass


class RegistryConnectionError(RegistryError):
    """Raised when unable to connect to the registry."""

    pass


class RegistryHTTPError(RegistryError):
    """Raised when the registry answers with a non-success status."""

    def __init__(self, status: int, url: str) -> None:
        super().__init__(f"Response status for {url}: {status}")
        self.status = status
        self.url = url


class AuthenticationError(RegistryError):
    """Raised when the token endpoint does not hand out a token."""

    pass


class ManifestError(RegistryError):
    """Raised when a manifest document is malformed or of the wrong kind."""

    pass


class ParseError(RegistryError):
    """Raised when an image reference or a compressed frame cannot be parsed."""

    pass


class UnsupportedMediaTypeError(RegistryError):
    """Raised when a layer uses a media type we cannot size."""

    def __init__(self, media_type: str) -> None:
        super().__init__(f"Unrecognized media type {media_type}")
        self.media_type = media_type


class PlatformNotFoundError(RegistryError):
    """Raised when a manifest list has no entry for the requested platform."""

    pass
