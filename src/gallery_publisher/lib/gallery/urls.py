"""Service URL construction for gallery requests."""

import httpx

SERVICE_ENDPOINT = "/api/v2/package"


def ensure_trailing_slash(url: str) -> str:
    """Make the path of ``url`` end with ``/``, leaving any query in place."""
    parsed = httpx.URL(url)
    path = parsed.path
    if not path.endswith("/"):
        path += "/"
    return str(parsed.copy_with(path=path))


def build_service_url(base_url: str, relative_path: str) -> str:
    """Build the absolute request URL for a path relative to the gallery.

    A base URL without a path (a bare gallery host) gets the package
    service endpoint inserted before ``relative_path``.  A base URL that
    already has a path is taken to be the package endpoint itself, and
    ``relative_path`` is resolved against it directly.

    Args:
        base_url: Resolved gallery base URL, ending with ``/``.
        relative_path: Path below the package endpoint, e.g. ``"Foo/1.0.0"``
            or ``""`` for the endpoint itself.

    Returns:
        The absolute request URL.
    """
    base = httpx.URL(base_url)
    if not base.path.lstrip("/"):
        return str(base.join(f"{SERVICE_ENDPOINT}/{relative_path}"))
    return str(base.join(relative_path))
