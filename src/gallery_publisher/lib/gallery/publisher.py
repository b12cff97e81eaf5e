"""Publish and retract packages on a gallery."""

from __future__ import annotations

from http import HTTPStatus
from typing import BinaryIO

import httpx
from loguru import logger

from gallery_publisher.lib.gallery.classifier import execute_and_classify
from gallery_publisher.lib.gallery.endpoint import GalleryEndpoint
from gallery_publisher.lib.gallery.errors import ConfigurationError
from gallery_publisher.lib.gallery.multipart import encode_multipart
from gallery_publisher.lib.gallery.observer import ProgressObserver
from gallery_publisher.lib.gallery.types import HttpMethod, PackageIdentity

API_KEY_HEADER = "X-NuGet-ApiKey"
PACKAGE_FIELD_NAME = "package"


def _require_api_key(api_key: str) -> None:
    if not api_key:
        msg = "API key cannot be null or empty."
        raise ConfigurationError(msg)


def _log_outcome(operation: str, package: PackageIdentity, url: str, successful: bool) -> None:
    logger.bind(
        json_output=True,
        operation=operation,
        package_id=package.id,
        package_version=package.version,
        url=url,
        succeeded=successful,
    ).info("{} {} {}", operation, package, "succeeded" if successful else "failed")


class GalleryPublisher:
    """Upload packages to, and retract them from, a gallery endpoint.

    Args:
        endpoint: The gallery endpoint to talk to.
    """

    def __init__(self, endpoint: GalleryEndpoint) -> None:
        self._endpoint = endpoint

    @property
    def source(self) -> str:
        return self._endpoint.source

    def publish(
        self,
        api_key: str,
        package_stream: BinaryIO,
        package: PackageIdentity,
        unlisted: bool,
        observer: ProgressObserver,
    ) -> bool:
        """Upload a package, optionally unlisting it right away.

        The upload uses the endpoint's read/write timeout for every phase,
        including connect, so a large upload is not cut short by a shorter
        default connection timeout.  When the upload succeeds and
        ``unlisted`` is set, the same version is retracted with the same
        observer, so the observer sees two operations in sequence.

        Args:
            api_key: Gallery API key.
            package_stream: Binary stream of the package archive.
            package: Id and version of the package being uploaded.
            unlisted: Retract the version after a successful upload.
            observer: Progress observer for the upload (and the retraction).

        Returns:
            True if the upload (and the retraction, when requested) succeeded.

        Raises:
            ConfigurationError: If ``api_key`` is empty.
            NetworkError: If the gallery could not be reached.
        """
        _require_api_key(api_key)

        request = (
            self._endpoint.create_request("", HttpMethod.PUT, "application/octet-stream")
            .with_header(API_KEY_HEADER, api_key)
            .with_body(encode_multipart(PACKAGE_FIELD_NAME, package_stream))
            .with_timeout(httpx.Timeout(self._endpoint.timeout))
        )
        logger.info("Publishing {} to {}", package, request.url)
        successful = execute_and_classify(
            self._endpoint.client,
            request,
            observer,
            expected_status=HTTPStatus.CREATED,
        )
        _log_outcome("publish", package, request.url, successful)
        if successful and unlisted:
            return self.retract(api_key, package.id, package.version, observer)
        return successful

    def retract(
        self,
        api_key: str,
        package_id: str,
        package_version: str,
        observer: ProgressObserver,
    ) -> bool:
        """Delete (unlist) a published package version.

        Any response below 400 counts as success.

        Args:
            api_key: Gallery API key.
            package_id: Package id.
            package_version: Package version.
            observer: Progress observer.

        Returns:
            True if the gallery accepted the request.

        Raises:
            ConfigurationError: If ``api_key`` is empty.
            ValueError: If the id or version is empty.
            NetworkError: If the gallery could not be reached.
        """
        _require_api_key(api_key)
        package = PackageIdentity(id=package_id, version=package_version)

        request = self._endpoint.create_request(package.path, HttpMethod.DELETE, "text/html").with_header(
            API_KEY_HEADER, api_key
        )
        logger.info("Retracting {} at {}", package, request.url)
        successful = execute_and_classify(self._endpoint.client, request, observer)
        _log_outcome("retract", package, request.url, successful)
        return successful
