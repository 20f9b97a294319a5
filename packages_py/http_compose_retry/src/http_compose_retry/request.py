"""
Request analysis and rewinding for the retry transport
"""
import inspect
from typing import Any

import httpx

from http_retry import GET_BODY_EXTENSION, is_idempotent_method
from http_retry.headers import HEADER_CONTENT_LENGTH, HEADER_TRANSFER_ENCODING


_FRAMING_HEADERS = (HEADER_CONTENT_LENGTH, HEADER_TRANSFER_ENCODING)


def is_request_idempotent(request: httpx.Request) -> bool:
    """Check if the request method or its idempotency key allows a retry."""
    return is_idempotent_method(request.method, request.headers)


def is_request_rewindable(request: httpx.Request) -> bool:
    """
    Check if the request body can be sent again.

    In-memory bodies (including empty ones) replay as-is. Streaming bodies
    need a ``get_body`` callable in the request extensions.
    """
    if callable(request.extensions.get(GET_BODY_EXTENSION)):
        return True
    return isinstance(request.stream, httpx.ByteStream)


def clone_request(request: httpx.Request, content: Any) -> httpx.Request:
    """
    Return a copy of the request carrying a new body.

    Framing headers are recomputed from the new body.
    """
    headers = request.headers.copy()
    for name in _FRAMING_HEADERS:
        headers.pop(name, None)
    return httpx.Request(
        request.method,
        request.url,
        headers=headers,
        content=content,
        extensions=dict(request.extensions),
    )


def rewind_request(request: httpx.Request) -> httpx.Request:
    """
    Prepare the request for another attempt (sync).

    Returns:
        A clone with a fresh body when the request has a ``get_body``
        callable, the request itself otherwise

    Raises:
        Exception: Whatever ``get_body`` raises
    """
    get_body = request.extensions.get(GET_BODY_EXTENSION)
    if get_body is None:
        return request
    return clone_request(request, get_body())


async def arewind_request(request: httpx.Request) -> httpx.Request:
    """Prepare the request for another attempt (async); ``get_body`` may be a coroutine function."""
    get_body = request.extensions.get(GET_BODY_EXTENSION)
    if get_body is None:
        return request
    body = get_body()
    if inspect.isawaitable(body):
        body = await body
    return clone_request(request, body)
