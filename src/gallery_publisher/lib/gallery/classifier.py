"""Send a gallery request and classify the response.

The outcome is reported twice: as the boolean return value, and as a
``Started`` plus terminal event on the progress observer.  Only failures
that produced no response at all are raised.
"""

from http import HTTPStatus
from typing import Any

import httpx
from loguru import logger

from gallery_publisher.lib.gallery.errors import NetworkError, ServerRejection
from gallery_publisher.lib.gallery.observer import Completed, Failed, ProgressObserver, Started
from gallery_publisher.lib.gallery.types import UploadRequest


def is_rejected(status_code: int, expected_status: HTTPStatus | None) -> bool:
    """Decide whether a status code counts as a failure.

    With an expected status, anything else is a failure.  Without one,
    client and server errors (400 and above) are failures; 1xx, 2xx and
    3xx never are.

    Args:
        status_code: Status code returned by the gallery.
        expected_status: Status the caller requires, if any.

    Returns:
        True if the response must be reported as a failure.
    """
    if expected_status is not None:
        return status_code != expected_status
    return status_code >= 400


def _reason(response: httpx.Response) -> str:
    return response.reason_phrase or str(response.status_code)


def execute_and_classify(
    client: httpx.Client,
    request: UploadRequest,
    observer: ProgressObserver,
    expected_status: HTTPStatus | None = None,
) -> bool:
    """Send a request and report whether the gallery accepted it.

    Args:
        client: HTTP client used to send the request.
        request: Request descriptor built by the endpoint.
        observer: Receives ``Started`` and then ``Completed`` or ``Failed``.
        expected_status: Exact status required for success.  When None,
            any status below 400 is a success.

    Returns:
        True if the request succeeded, False if the gallery rejected it.

    Raises:
        NetworkError: If no response was received.  The observer gets
            ``Started`` but no terminal event in that case.
    """
    observer.on_event(Started())

    kwargs: dict[str, Any] = {}
    if request.timeout is not None:
        kwargs["timeout"] = request.timeout
    content = request.body.stream if request.body is not None else None

    logger.debug("{} {}", request.method, request.url)
    try:
        with client.stream(
            request.method.value,
            request.url,
            headers=request.build_headers(),
            content=content,
            **kwargs,
        ) as response:
            response.raise_for_status()
            if is_rejected(response.status_code, expected_status):
                error = ServerRejection(response.status_code, _reason(response))
                logger.error("{} {} rejected: {}", request.method, request.url, error)
                observer.on_event(Failed(error))
                return False
    except httpx.HTTPStatusError as exc:
        response = exc.response
        if is_rejected(response.status_code, expected_status):
            error = ServerRejection(response.status_code, _reason(response), str(exc))
            logger.error("{} {} rejected: {}", request.method, request.url, error)
            observer.on_event(Failed(error))
            return False
    except httpx.RequestError as exc:
        msg = f"{request.method} {request.url} failed: {exc}"
        logger.error(msg)
        raise NetworkError(msg, url=request.url) from exc

    logger.debug("{} {} -> HTTP {}", request.method, request.url, response.status_code)
    observer.on_event(Completed())
    return True
