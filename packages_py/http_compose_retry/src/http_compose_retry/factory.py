"""
Factory functions for creating retry-enabled transports and clients
"""
from typing import Any, Callable, Iterable, Optional, TypeVar

import httpx

from http_retry import ClientTrace, RetryPolicy
from .transport import RetryTransport, SyncRetryTransport

T = TypeVar("T")


def _wrap_all(base: T, wrappers: Iterable[Callable[[T], T]]) -> T:
    # Outermost wrapper last
    for wrap in wrappers:
        base = wrap(base)
    return base


def compose_transport(
    base: httpx.AsyncBaseTransport,
    *wrappers: Callable[[httpx.AsyncBaseTransport], httpx.AsyncBaseTransport],
) -> httpx.AsyncBaseTransport:
    """
    Stack async transport wrappers around a base transport.

    The first wrapper sits closest to the network, the last one sees the
    request first.

    Args:
        base: The base transport to wrap
        *wrappers: Transport wrapper functions to apply in order

    Returns:
        Composed transport with all wrappers applied

    Example:
        transport = compose_transport(
            httpx.AsyncHTTPTransport(),
            create_retry_transport_wrapper(RETRY_PRESETS["quick"]),
        )
        client = httpx.AsyncClient(transport=transport)
    """
    return _wrap_all(base, wrappers)


def compose_sync_transport(
    base: httpx.BaseTransport,
    *wrappers: Callable[[httpx.BaseTransport], httpx.BaseTransport],
) -> httpx.BaseTransport:
    """
    Sync counterpart of compose_transport.

    Example:
        transport = compose_sync_transport(
            httpx.HTTPTransport(),
            lambda inner: SyncRetryTransport(inner, max_retries=3),
        )
    """
    return _wrap_all(base, wrappers)


def create_retry_client(
    *,
    policy: Optional[RetryPolicy] = None,
    max_retries: Optional[int] = None,
    base_url: Optional[str] = None,
    proxy: Optional[str] = None,
    timeout: float = 5.0,
    trace: Optional[ClientTrace] = None,
    **client_kwargs: Any,
) -> httpx.AsyncClient:
    """
    Create a retry-enabled async HTTP client.

    Args:
        policy: Backoff policy. Default: DEFAULT_RETRY_POLICY
        max_retries: Maximum retries. Default: unbounded
        base_url: Base URL for requests
        proxy: Proxy URL to use
        timeout: Request timeout in seconds. Default: 5.0
        trace: Default hooks called before each retry
        **client_kwargs: Additional arguments for httpx.AsyncClient

    Returns:
        Retry-enabled async HTTP client

    Example:
        client = create_retry_client(
            policy=RETRY_PRESETS["default"],
            base_url="https://api.example.com",
        )
        response = await client.get("/data")
    """
    transport = RetryTransport(
        httpx.AsyncHTTPTransport(proxy=proxy),
        policy=policy,
        max_retries=max_retries,
        trace=trace,
    )

    return httpx.AsyncClient(
        transport=transport,
        base_url=base_url or "",
        timeout=timeout,
        **client_kwargs,
    )


def create_retry_sync_client(
    *,
    policy: Optional[RetryPolicy] = None,
    max_retries: Optional[int] = None,
    base_url: Optional[str] = None,
    proxy: Optional[str] = None,
    timeout: float = 5.0,
    trace: Optional[ClientTrace] = None,
    **client_kwargs: Any,
) -> httpx.Client:
    """
    Create a retry-enabled sync HTTP client.

    Args:
        policy: Backoff policy. Default: DEFAULT_RETRY_POLICY
        max_retries: Maximum retries. Default: unbounded
        base_url: Base URL for requests
        proxy: Proxy URL to use
        timeout: Request timeout in seconds. Default: 5.0
        trace: Default hooks called before each retry
        **client_kwargs: Additional arguments for httpx.Client

    Returns:
        Retry-enabled sync HTTP client
    """
    transport = SyncRetryTransport(
        httpx.HTTPTransport(proxy=proxy),
        policy=policy,
        max_retries=max_retries,
        trace=trace,
    )

    return httpx.Client(
        transport=transport,
        base_url=base_url or "",
        timeout=timeout,
        **client_kwargs,
    )


def create_retry_transport_wrapper(
    policy: Optional[RetryPolicy] = None,
    *,
    max_retries: Optional[int] = None,
    trace: Optional[ClientTrace] = None,
) -> Callable[[httpx.AsyncBaseTransport], RetryTransport]:
    """
    Create a retry transport wrapper function for compose_transport.

    Example:
        github_retry = create_retry_transport_wrapper(RETRY_PRESETS["gentle"])
        github_transport = github_retry(httpx.AsyncHTTPTransport())
    """

    def wrapper(inner: httpx.AsyncBaseTransport) -> RetryTransport:
        return RetryTransport(inner, policy=policy, max_retries=max_retries, trace=trace)

    return wrapper


# Preset retry policies
RETRY_PRESETS = {
    "default": RetryPolicy(),
    "aggressive": RetryPolicy(
        initial_interval_seconds=0.1,
        interval_multiplier=2.0,
        jitter_factor=0.3,
        max_interval_seconds=10.0,
    ),
    "quick": RetryPolicy(
        initial_interval_seconds=0.1,
        interval_multiplier=1.5,
        jitter_factor=0.2,
        max_interval_seconds=2.0,
        max_retries=3,
    ),
    "gentle": RetryPolicy(
        initial_interval_seconds=2.0,
        interval_multiplier=2.0,
        jitter_factor=0.5,
        max_interval_seconds=120.0,
    ),
}
