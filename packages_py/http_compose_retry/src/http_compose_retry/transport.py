"""
Retry transport wrapper for httpx
"""
import logging
from typing import Optional

import httpx

from http_retry import (
    ClientTrace,
    RetryInfo,
    RetryPolicy,
    RetryPolicyError,
    async_wait,
    compute_wait_duration,
    context_client_trace,
    initial_interval,
    merge_policy,
    next_interval,
    request_cancel_event,
    sync_wait,
)
from .request import (
    arewind_request,
    is_request_idempotent,
    is_request_rewindable,
    rewind_request,
)
from .response import adrain_close, drain_close, is_response_retryable

logger = logging.getLogger(__name__)


def _build_policy(policy: Optional[RetryPolicy], max_retries: Optional[int]) -> RetryPolicy:
    policy = merge_policy(policy)
    if max_retries is not None:
        policy = policy.with_options(max_retries=max_retries)
    return policy


def _notify_retry(trace: Optional[ClientTrace], retry_count: int, status_code: int) -> None:
    if trace is not None and trace.retry is not None:
        trace.retry(RetryInfo(retry_count=retry_count, status_code=status_code))


class RetryTransport(httpx.AsyncBaseTransport):
    """
    Retry transport wrapper for httpx.

    Wraps another transport and retries retryable responses of idempotent
    requests, following the backoff policy or the server's Retry-After
    header, until the response is no longer retryable, the request's cancel
    event is set, or ``max_retries`` is reached.

    Transport errors raised by the wrapped transport are never retried; they
    propagate unchanged. In every other case the last response received is
    returned, without raising.

    The request's cancel event must be an asyncio.Event set from the event
    loop thread (use ``loop.call_soon_threadsafe(event.set)`` from other
    threads); a threading.Event raises TypeError. Cancelling the task also
    stops the wait, and the superseded response is closed before
    CancelledError propagates.

    Example:
        base = httpx.AsyncHTTPTransport()
        transport = RetryTransport(base, policy=RetryPolicy(initial_interval_seconds=0.5))
        client = httpx.AsyncClient(transport=transport)
    """

    def __init__(
        self,
        inner: Optional[httpx.AsyncBaseTransport] = None,
        *,
        policy: Optional[RetryPolicy] = None,
        max_retries: Optional[int] = None,
        trace: Optional[ClientTrace] = None,
    ) -> None:
        """
        Create a new RetryTransport.

        Args:
            inner: The wrapped transport to delegate requests to.
                Default: httpx.AsyncHTTPTransport()
            policy: Backoff policy. Default: DEFAULT_RETRY_POLICY
            max_retries: Shortcut overriding the policy's max_retries
            trace: Default hooks for requests that carry none

        Raises:
            RetryPolicyError: If inner is not an async transport or the
                policy is invalid
        """
        if inner is None:
            inner = httpx.AsyncHTTPTransport()
        elif not callable(getattr(inner, "handle_async_request", None)):
            raise RetryPolicyError(f"invalid inner transport: {inner!r}")

        self._inner = inner
        self._policy = _build_policy(policy, max_retries)
        self._trace = trace

    @property
    def policy(self) -> RetryPolicy:
        """Get the backoff policy."""
        return self._policy

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle an async HTTP request with retry logic"""
        policy = self._policy
        request_retryable = is_request_idempotent(request) and is_request_rewindable(request)
        trace = context_client_trace(request) or self._trace
        cancel_event = request_cancel_event(request)
        interval = initial_interval(policy)
        retry_count = 0

        while True:
            response = await self._inner.handle_async_request(request)

            if not request_retryable or not is_response_retryable(response):
                return response

            if policy.max_retries is not None and retry_count >= policy.max_retries:
                logger.debug(
                    f"Giving up {request.method} {request.url} after {retry_count} retries "
                    f"(HTTP {response.status_code})"
                )
                return response

            try:
                request = await arewind_request(request)
            except Exception as e:
                logger.warning(f"Cannot rewind body of {request.method} {request.url}, not retrying: {e!r}")
                return response

            delay = compute_wait_duration(interval, policy.jitter_factor, response.headers)
            logger.debug(
                f"Retrying {request.method} {request.url} after HTTP {response.status_code} "
                f"in {delay:.3f}s (retry {retry_count + 1})"
            )

            try:
                cancelled = await async_wait(delay, cancel_event)
            except BaseException:
                await response.aclose()
                raise
            if cancelled:
                logger.debug(f"Retry of {request.method} {request.url} cancelled")
                return response

            await adrain_close(response)

            interval = next_interval(interval, policy)
            retry_count += 1
            _notify_retry(trace, retry_count, response.status_code)

    async def aclose(self) -> None:
        """Close the transport"""
        await self._inner.aclose()


class SyncRetryTransport(httpx.BaseTransport):
    """
    Synchronous retry transport wrapper for httpx.

    Note: Waits block the calling thread; set the request's cancel event
    (a threading.Event) from another thread to stop retrying.
    For async applications, use RetryTransport instead.
    """

    def __init__(
        self,
        inner: Optional[httpx.BaseTransport] = None,
        *,
        policy: Optional[RetryPolicy] = None,
        max_retries: Optional[int] = None,
        trace: Optional[ClientTrace] = None,
    ) -> None:
        """
        Create a new SyncRetryTransport.

        Args:
            inner: The wrapped transport to delegate requests to.
                Default: httpx.HTTPTransport()
            policy: Backoff policy. Default: DEFAULT_RETRY_POLICY
            max_retries: Shortcut overriding the policy's max_retries
            trace: Default hooks for requests that carry none

        Raises:
            RetryPolicyError: If inner is not a transport or the policy is invalid
        """
        if inner is None:
            inner = httpx.HTTPTransport()
        elif not callable(getattr(inner, "handle_request", None)):
            raise RetryPolicyError(f"invalid inner transport: {inner!r}")

        self._inner = inner
        self._policy = _build_policy(policy, max_retries)
        self._trace = trace

    @property
    def policy(self) -> RetryPolicy:
        """Get the backoff policy."""
        return self._policy

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Handle a sync HTTP request with retry logic"""
        policy = self._policy
        request_retryable = is_request_idempotent(request) and is_request_rewindable(request)
        trace = context_client_trace(request) or self._trace
        cancel_event = request_cancel_event(request)
        interval = initial_interval(policy)
        retry_count = 0

        while True:
            response = self._inner.handle_request(request)

            if not request_retryable or not is_response_retryable(response):
                return response

            if policy.max_retries is not None and retry_count >= policy.max_retries:
                logger.debug(
                    f"Giving up {request.method} {request.url} after {retry_count} retries "
                    f"(HTTP {response.status_code})"
                )
                return response

            try:
                request = rewind_request(request)
            except Exception as e:
                logger.warning(f"Cannot rewind body of {request.method} {request.url}, not retrying: {e!r}")
                return response

            delay = compute_wait_duration(interval, policy.jitter_factor, response.headers)
            logger.debug(
                f"Retrying {request.method} {request.url} after HTTP {response.status_code} "
                f"in {delay:.3f}s (retry {retry_count + 1})"
            )

            try:
                cancelled = sync_wait(delay, cancel_event)
            except BaseException:
                response.close()
                raise
            if cancelled:
                logger.debug(f"Retry of {request.method} {request.url} cancelled")
                return response

            drain_close(response)

            interval = next_interval(interval, policy)
            retry_count += 1
            _notify_retry(trace, retry_count, response.status_code)

    def close(self) -> None:
        """Close the transport"""
        self._inner.close()
