"""Gallery endpoint: configured source, resolved base URL, request factory."""

from __future__ import annotations

import threading
from types import TracebackType

import httpx

from gallery_publisher.lib.gallery.errors import ConfigurationError
from gallery_publisher.lib.gallery.resolver import resolve_base_url
from gallery_publisher.lib.gallery.types import HttpMethod, UploadRequest
from gallery_publisher.lib.gallery.urls import build_service_url

DEFAULT_TIMEOUT = 300.0
_DEFAULT_CONNECT_TIMEOUT = 30.0


class GalleryEndpoint:
    """A gallery source plus the HTTP client used to talk to it.

    The base URL is resolved lazily, at most once per instance, even when
    several threads ask for it at the same time.

    Args:
        source: Configured gallery source URL.
        user_agent: User-Agent header value; omitted when None or empty.
        timeout: Read/write timeout in seconds.
        client: HTTP client to use.  When omitted, one is created and owned
            by the endpoint (closed by ``close()``).

    Raises:
        ConfigurationError: If ``source`` is empty.
    """

    def __init__(
        self,
        source: str,
        user_agent: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        if not source or not source.strip():
            msg = "Gallery source cannot be null or empty."
            raise ConfigurationError(msg)
        self._source = source.strip()
        self._user_agent = user_agent
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout, connect=min(timeout, _DEFAULT_CONNECT_TIMEOUT)),
        )
        self._base_url: str | None = None
        self._base_url_lock = threading.Lock()

    @property
    def source(self) -> str:
        """The configured gallery source URL."""
        return self._source

    @property
    def user_agent(self) -> str | None:
        return self._user_agent

    @property
    def timeout(self) -> float:
        """Read/write timeout in seconds."""
        return self._timeout

    @property
    def client(self) -> httpx.Client:
        return self._client

    @property
    def base_url(self) -> str:
        """The resolved gallery base URL, ending with ``/``.

        Raises:
            RedirectResolutionError: If the source could not be reached.
                Nothing is cached in that case; the next access retries.
        """
        if self._base_url is None:
            with self._base_url_lock:
                if self._base_url is None:
                    self._base_url = resolve_base_url(self._client, self._source)
        return self._base_url

    def create_request(self, path: str, method: HttpMethod, content_type: str) -> UploadRequest:
        """Build a request descriptor for a path below the package endpoint.

        Args:
            path: Path relative to the package endpoint.
            method: HTTP method.
            content_type: Content-Type of the request.

        Returns:
            An UploadRequest without API key or body.
        """
        url = build_service_url(self.base_url, path)
        headers: dict[str, str] = {}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        return UploadRequest(url=url, method=method, content_type=content_type, headers=headers)

    def close(self) -> None:
        """Close the HTTP client if this endpoint created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GalleryEndpoint:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
