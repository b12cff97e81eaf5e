"""Shared test fixtures for mocked gallery HTTP traffic, observers, and packages."""

import threading
import zipfile
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pytest

from gallery_publisher.lib.gallery.endpoint import GalleryEndpoint
from gallery_publisher.lib.gallery.observer import EventRecorder

GALLERY = "https://gallery.example.com/"

Handler = Callable[[httpx.Request], httpx.Response]


class GalleryStub:
    """Mock gallery: records requests and answers from per-method handlers.

    GET requests (base URL lookups) answer 200 unless overridden.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handlers: dict[str, Handler] = {"GET": lambda request: httpx.Response(200)}
        self._lock = threading.Lock()

    def on(self, method: str, handler: Handler) -> None:
        self.handlers[method] = handler

    def respond(self, method: str, status_code: int, **kwargs: object) -> None:
        self.handlers[method] = lambda request: httpx.Response(status_code, **kwargs)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        handler = self.handlers.get(request.method)
        if handler is None:
            return httpx.Response(405)
        return handler(request)

    def methods(self) -> list[str]:
        return [r.method for r in self.requests]

    def by_method(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]


@pytest.fixture
def gallery() -> GalleryStub:
    """A mock gallery that answers GET lookups with 200."""
    return GalleryStub()


@pytest.fixture
def http_client(gallery: GalleryStub) -> Generator[httpx.Client]:
    """An httpx client wired to the mock gallery."""
    client = httpx.Client(transport=httpx.MockTransport(gallery))
    yield client
    client.close()


@pytest.fixture
def endpoint(http_client: httpx.Client) -> GalleryEndpoint:
    """Endpoint for a bare gallery host using the mocked client."""
    return GalleryEndpoint(GALLERY, user_agent="gallery-publisher/test", client=http_client)


@pytest.fixture
def recorder() -> EventRecorder:
    """Observer collecting progress events."""
    return EventRecorder()


NUSPEC = b"""<?xml version="1.0" encoding="utf-8"?>
<package xmlns="http://schemas.microsoft.com/packaging/2013/05/nuspec.xsd">
  <metadata>
    <id>Contoso.Utilities</id>
    <version>1.2.3</version>
    <authors>Contoso</authors>
    <description>Utilities.</description>
  </metadata>
</package>
"""


@pytest.fixture
def package_file(tmp_path: Path) -> Path:
    """A minimal package archive with a root-level manifest."""
    path = tmp_path / "Contoso.Utilities.1.2.3.nupkg"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("Contoso.Utilities.nuspec", NUSPEC)
        zf.writestr("lib/net8.0/Contoso.Utilities.dll", b"\x4d\x5a" + b"\x00" * 256)
    return path
