"""Streaming multipart/form-data encoding for package uploads.

The body is produced by httpx's ``files=`` encoding, which reads the file
in fixed-size chunks while the body is being sent, so large packages are
never held in memory as a whole.
"""

from __future__ import annotations

import secrets
from typing import BinaryIO

import httpx

from gallery_publisher.lib.gallery.types import MultipartBody

PART_CONTENT_TYPE = "application/octet-stream"


def generate_boundary() -> str:
    """Return a fresh random boundary token."""
    return f"----GalleryPublisherBoundary{secrets.token_hex(16)}"


def encode_multipart(field_name: str, content: BinaryIO, *, boundary: str | None = None) -> MultipartBody:
    """Wrap a binary stream in a single-part multipart/form-data body.

    The part is named ``field_name`` and uses it as its filename too.  The
    content bytes are copied unmodified, starting from the beginning of
    the stream, and reading happens lazily as the body is consumed.

    Args:
        field_name: Form field name (also used as the part's filename).
        content: Binary stream with the file content.
        boundary: Boundary token to use; generated when omitted.

    Returns:
        A MultipartBody whose ``content_length`` is set when the size of
        ``content`` can be determined.

    Raises:
        ValueError: If ``field_name`` is empty or contains a quote, CR or LF.
    """
    if not field_name or any(c in field_name for c in '"\r\n'):
        msg = f"Invalid multipart field name: {field_name!r}"
        raise ValueError(msg)

    boundary = boundary or generate_boundary()
    # Only used to encode the body; the request itself is never sent.
    encoded = httpx.Request(
        "PUT",
        "/",
        files={field_name: (field_name, content, PART_CONTENT_TYPE)},
        headers={"Content-Type": f"multipart/form-data; boundary={boundary}"},
    )

    headers = {"Content-Type": encoded.headers["Content-Type"]}
    if "Content-Length" in encoded.headers:
        headers["Content-Length"] = encoded.headers["Content-Length"]
    return MultipartBody(boundary=boundary, stream=encoded.stream, headers=headers)
