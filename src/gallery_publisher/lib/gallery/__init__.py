"""Gallery client library: publish and retract packages over HTTP.

Public API:
    - GalleryEndpoint: Configured source with lazily resolved base URL
    - GalleryPublisher: publish() and retract() operations
    - execute_and_classify: Send a request and classify the response
    - encode_multipart: Streaming multipart/form-data encoder
    - build_service_url / resolve_base_url: URL helpers
    - read_package_identity: Read id/version from a package archive
    - Started / Completed / Failed: Progress events
    - GalleryError and subclasses: Error taxonomy
"""

from gallery_publisher.lib.gallery.classifier import execute_and_classify, is_rejected
from gallery_publisher.lib.gallery.endpoint import GalleryEndpoint
from gallery_publisher.lib.gallery.errors import (
    ConfigurationError,
    GalleryError,
    NetworkError,
    PackageMetadataError,
    RedirectResolutionError,
    ServerRejection,
)
from gallery_publisher.lib.gallery.multipart import encode_multipart
from gallery_publisher.lib.gallery.observer import (
    Completed,
    EventRecorder,
    Failed,
    LoggingObserver,
    ProgressEvent,
    ProgressObserver,
    Started,
)
from gallery_publisher.lib.gallery.package import parse_nuspec, read_package_identity
from gallery_publisher.lib.gallery.publisher import API_KEY_HEADER, GalleryPublisher
from gallery_publisher.lib.gallery.resolver import resolve_base_url
from gallery_publisher.lib.gallery.types import HttpMethod, MultipartBody, PackageIdentity, UploadRequest
from gallery_publisher.lib.gallery.urls import SERVICE_ENDPOINT, build_service_url, ensure_trailing_slash

__all__ = [
    "API_KEY_HEADER",
    "SERVICE_ENDPOINT",
    "Completed",
    "ConfigurationError",
    "EventRecorder",
    "Failed",
    "GalleryEndpoint",
    "GalleryError",
    "GalleryPublisher",
    "HttpMethod",
    "LoggingObserver",
    "MultipartBody",
    "NetworkError",
    "PackageIdentity",
    "PackageMetadataError",
    "ProgressEvent",
    "ProgressObserver",
    "RedirectResolutionError",
    "ServerRejection",
    "Started",
    "UploadRequest",
    "build_service_url",
    "encode_multipart",
    "ensure_trailing_slash",
    "execute_and_classify",
    "is_rejected",
    "parse_nuspec",
    "read_package_identity",
    "resolve_base_url",
]
