"""Error types raised or reported by the gallery client.

Configuration and network errors are raised to the caller. Server
rejections are delivered through the progress observer instead.
"""

# Message template for a gallery that answered with an unexpected status.
PACKAGE_SERVER_ERROR = "Failed to process request. '{reason}'. {message}"


class GalleryError(Exception):
    """Base class for all gallery client errors."""


class ConfigurationError(GalleryError):
    """Raised when the client is configured with a missing or empty value."""


class NetworkError(GalleryError):
    """Raised when no HTTP response could be obtained from the gallery.

    Args:
        message: Human-readable error description.
        url: The URL that was being requested.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class RedirectResolutionError(NetworkError):
    """Raised when the gallery base URL could not be resolved."""


class ServerRejection(GalleryError):
    """The gallery answered, but with a status that does not meet expectations.

    Args:
        status_code: HTTP status code returned by the gallery.
        reason: The response's reason phrase (status description).
        message: Underlying transport message, possibly empty.
    """

    def __init__(self, status_code: int, reason: str, message: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.message = message
        super().__init__(PACKAGE_SERVER_ERROR.format(reason=reason, message=message).rstrip())


class PackageMetadataError(GalleryError):
    """Raised when a package archive has no readable id/version manifest."""
