"""
Request-scoped retry hooks.

Hooks travel with the request in ``httpx.Request.extensions`` so they can be
set per call, e.g.::

    client.get(url, extensions={RETRY_TRACE_EXTENSION: ClientTrace(retry=on_retry)})
"""
import asyncio
import threading
from typing import Optional, Union

import httpx

from .types import ClientTrace


RETRY_TRACE_EXTENSION = "retry_trace"
"""Extension key holding a ClientTrace"""

RETRY_CANCEL_EXTENSION = "retry_cancel"
"""Extension key holding a threading.Event (sync) or asyncio.Event (async)"""

GET_BODY_EXTENSION = "get_body"
"""Extension key holding a callable returning a fresh request body"""


CancelEvent = Union[threading.Event, asyncio.Event]


def context_client_trace(request: httpx.Request) -> Optional[ClientTrace]:
    """Return the ClientTrace attached to the request, or None."""
    trace = request.extensions.get(RETRY_TRACE_EXTENSION)
    if isinstance(trace, ClientTrace):
        return trace
    return None


def with_client_trace(request: httpx.Request, trace: Optional[ClientTrace]) -> httpx.Request:
    """
    Attach trace hooks to the request.

    A None trace leaves the request untouched.

    Returns:
        The same request, for chaining
    """
    if trace is not None:
        request.extensions = {**request.extensions, RETRY_TRACE_EXTENSION: trace}
    return request


def request_cancel_event(request: httpx.Request) -> Optional[CancelEvent]:
    """Return the cancel event attached to the request, or None."""
    return request.extensions.get(RETRY_CANCEL_EXTENSION)


def with_cancel_event(request: httpx.Request, event: Optional[CancelEvent]) -> httpx.Request:
    """
    Attach a cancel event to the request.

    Setting the event stops any further retry; the transport then returns the
    last response it received.
    """
    if event is not None:
        request.extensions = {**request.extensions, RETRY_CANCEL_EXTENSION: event}
    return request
