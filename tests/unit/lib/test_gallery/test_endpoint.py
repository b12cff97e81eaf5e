"""Unit tests for GalleryEndpoint."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from gallery_publisher.lib.gallery.endpoint import GalleryEndpoint
from gallery_publisher.lib.gallery.errors import ConfigurationError, RedirectResolutionError
from gallery_publisher.lib.gallery.types import HttpMethod


class _CountingGallery:
    """Answers every request with 200 and counts them."""

    def __init__(self, delay: float = 0.0) -> None:
        self.calls = 0
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return httpx.Response(200)


class TestConstruction:
    """Tests for endpoint construction."""

    @pytest.mark.parametrize("source", ["", "   "])
    def test_empty_source_rejected(self, source: str) -> None:
        with pytest.raises(ConfigurationError, match="cannot be null or empty"):
            GalleryEndpoint(source)

    def test_no_network_on_construction(self) -> None:
        gallery = _CountingGallery()
        client = httpx.Client(transport=httpx.MockTransport(gallery))
        endpoint = GalleryEndpoint("https://gallery.example.com/", client=client)
        assert endpoint.source == "https://gallery.example.com/"
        assert gallery.calls == 0

    def test_owned_client_closed(self) -> None:
        with GalleryEndpoint("https://gallery.example.com/") as endpoint:
            client = endpoint.client
        assert client.is_closed

    def test_injected_client_left_open(self) -> None:
        client = httpx.Client(transport=httpx.MockTransport(_CountingGallery()))
        with GalleryEndpoint("https://gallery.example.com/", client=client):
            pass
        assert not client.is_closed
        client.close()


class TestBaseUrl:
    """Tests for lazy base URL resolution."""

    def test_resolved_once(self) -> None:
        gallery = _CountingGallery()
        client = httpx.Client(transport=httpx.MockTransport(gallery))
        endpoint = GalleryEndpoint("https://gallery.example.com", client=client)

        assert endpoint.base_url.endswith("/")
        assert endpoint.base_url == endpoint.base_url
        endpoint.create_request("", HttpMethod.PUT, "application/octet-stream")
        assert gallery.calls == 1

    def test_concurrent_first_access_resolves_once(self) -> None:
        gallery = _CountingGallery(delay=0.05)
        client = httpx.Client(transport=httpx.MockTransport(gallery))
        endpoint = GalleryEndpoint("https://gallery.example.com/", client=client)
        barrier = threading.Barrier(8)

        def read_base_url() -> str:
            barrier.wait()
            return endpoint.base_url

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: read_base_url(), range(8)))

        assert gallery.calls == 1
        assert set(results) == {"https://gallery.example.com/"}

    def test_failed_resolution_is_not_cached(self) -> None:
        attempts: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            if len(attempts) == 1:
                raise httpx.ConnectError("dns failure", request=request)
            return httpx.Response(200)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        endpoint = GalleryEndpoint("https://gallery.example.com/", client=client)

        with pytest.raises(RedirectResolutionError):
            _ = endpoint.base_url
        assert endpoint.base_url == "https://gallery.example.com/"
        assert len(attempts) == 2


class TestCreateRequest:
    """Tests for create_request()."""

    def _endpoint(self, source: str, user_agent: str | None = None) -> GalleryEndpoint:
        client = httpx.Client(transport=httpx.MockTransport(_CountingGallery()))
        return GalleryEndpoint(source, user_agent=user_agent, client=client)

    def test_bare_host_request(self) -> None:
        request = self._endpoint("https://gallery.example.com/").create_request(
            "Contoso/1.0.0", HttpMethod.DELETE, "text/html"
        )
        assert request.url == "https://gallery.example.com/api/v2/package/Contoso/1.0.0"
        assert request.method is HttpMethod.DELETE
        assert request.content_type == "text/html"
        assert request.body is None

    def test_service_specific_request(self) -> None:
        request = self._endpoint("https://feeds.example.com/F/team/").create_request(
            "", HttpMethod.PUT, "application/octet-stream"
        )
        assert request.url == "https://feeds.example.com/F/team/"

    def test_user_agent_set_when_configured(self) -> None:
        request = self._endpoint("https://gallery.example.com/", "my-tool/2.0").create_request(
            "", HttpMethod.PUT, "application/octet-stream"
        )
        assert request.headers == {"User-Agent": "my-tool/2.0"}

    @pytest.mark.parametrize("user_agent", [None, ""])
    def test_user_agent_omitted_when_empty(self, user_agent: str | None) -> None:
        request = self._endpoint("https://gallery.example.com/", user_agent).create_request(
            "", HttpMethod.PUT, "application/octet-stream"
        )
        assert "User-Agent" not in request.headers
