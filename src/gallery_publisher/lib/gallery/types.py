"""Data types for the gallery client.

Defines the package identity, the multipart body descriptor, and the
request descriptor handed to the response classifier.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import StrEnum

import httpx


class HttpMethod(StrEnum):
    """HTTP methods used against the gallery."""

    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class PackageIdentity:
    """Identifies one version of a package.

    Attributes:
        id: Package id as known to the gallery.
        version: Package version string (not parsed).
    """

    id: str
    version: str

    def __post_init__(self) -> None:
        if not self.id:
            msg = "id must not be empty"
            raise ValueError(msg)
        if not self.version:
            msg = "version must not be empty"
            raise ValueError(msg)

    @property
    def path(self) -> str:
        """Relative URL path ``<id>/<version>`` for this package."""
        return "/".join((self.id, self.version))

    def __str__(self) -> str:
        return f"{self.id} {self.version}"


@dataclass
class MultipartBody:
    """A streamed multipart/form-data payload.

    Attributes:
        boundary: Boundary token separating the parts.
        stream: Iterable producing the encoded body chunk by chunk.
        headers: Entity headers of the encoded body: ``Content-Type`` and,
            when the size is known, ``Content-Length``.
    """

    boundary: str
    stream: Iterable[bytes]
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        """Content-Type header value including the boundary parameter."""
        return self.headers.get("Content-Type", f"multipart/form-data; boundary={self.boundary}")

    @property
    def content_length(self) -> int | None:
        """Total body size in bytes, or None when it cannot be determined."""
        value = self.headers.get("Content-Length")
        return int(value) if value is not None else None


@dataclass(frozen=True)
class UploadRequest:
    """Everything needed to send one request to the gallery.

    Attributes:
        url: Absolute target URL.
        method: HTTP method.
        content_type: Value of the Content-Type header.
        headers: Extra request headers (API key, user agent).
        body: Optional multipart body.  When set, its content type replaces
            ``content_type`` on the wire.
        timeout: Per-request timeout overriding the client default.
    """

    url: str
    method: HttpMethod
    content_type: str
    headers: dict[str, str] = field(default_factory=dict)
    body: MultipartBody | None = None
    timeout: httpx.Timeout | None = None

    def with_header(self, name: str, value: str) -> UploadRequest:
        """Return a copy with one more header."""
        return replace(self, headers={**self.headers, name: value})

    def with_body(self, body: MultipartBody) -> UploadRequest:
        """Return a copy carrying a multipart body."""
        return replace(self, body=body, content_type=body.content_type)

    def with_timeout(self, timeout: httpx.Timeout) -> UploadRequest:
        """Return a copy with a per-request timeout."""
        return replace(self, timeout=timeout)

    def build_headers(self) -> dict[str, str]:
        """Assemble the final header mapping sent on the wire."""
        headers = {"Content-Type": self.content_type, **self.headers}
        if self.body is not None:
            headers.update(self.body.headers)
        return headers
