"""Gallery base URL discovery.

Galleries are often configured with a short or legacy URL that redirects to
the real service root.  The resolver asks the transport to follow those
redirects once and keeps the URL it ended up at.
"""

import httpx
from loguru import logger

from gallery_publisher.lib.gallery.errors import RedirectResolutionError
from gallery_publisher.lib.gallery.urls import ensure_trailing_slash


def resolve_base_url(client: httpx.Client, source: str) -> str:
    """Resolve the final base URL of a gallery source.

    A GET request is sent with redirects enabled and the response is
    closed without reading its body.  When the final hop answers with an
    error status, the URL of that error response is still used.

    Args:
        client: HTTP client to send the resolution request with.
        source: Configured gallery source URL.

    Returns:
        The final URL, always ending with ``/``.

    Raises:
        RedirectResolutionError: If no response was received at all
            (DNS failure, refused connection, timeout, redirect loop).
    """
    try:
        with client.stream("GET", source, follow_redirects=True) as response:
            response.raise_for_status()
            url = str(response.url)
    except httpx.HTTPStatusError as exc:
        url = str(exc.response.url)
        logger.debug("Base URL lookup for {} answered HTTP {} at {}", source, exc.response.status_code, url)
    except httpx.RequestError as exc:
        msg = f"Could not resolve gallery base URL for {source}: {exc}"
        logger.error(msg)
        raise RedirectResolutionError(msg, url=source) from exc

    resolved = ensure_trailing_slash(url)
    if resolved != ensure_trailing_slash(source):
        logger.info("Gallery source {} resolved to {}", source, resolved)
    return resolved
