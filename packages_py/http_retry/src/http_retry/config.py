"""
Configuration utilities for http_retry
"""
import asyncio
import random
import threading
import time
from datetime import datetime, timezone
from typing import Optional

from .headers import (
    HEADER_IDEMPOTENCY_KEY,
    HEADER_RETRY_AFTER,
    HEADER_X_IDEMPOTENCY_KEY,
    HeadersLike,
    as_headers,
    parse_http_date,
)
from .trace import CancelEvent
from .types import (
    IDEMPOTENT_METHODS,
    RETRY_AFTER_REQUIRED_STATUS_CODES,
    RETRYABLE_STATUS_CODES,
    RetryPolicy,
)


DEFAULT_INITIAL_INTERVAL_SECONDS = 0.2
DEFAULT_INTERVAL_MULTIPLIER = 1.5
DEFAULT_JITTER_FACTOR = 0.2
DEFAULT_MAX_INTERVAL_SECONDS = 30.0

# Longest wait the platform can block on, halved so absolute deadlines stay
# in range. Longer delays (e.g. a far-future Retry-After) are capped.
MAX_WAIT_SECONDS = threading.TIMEOUT_MAX / 2

# Default retry policy
DEFAULT_RETRY_POLICY = RetryPolicy(
    initial_interval_seconds=DEFAULT_INITIAL_INTERVAL_SECONDS,
    interval_multiplier=DEFAULT_INTERVAL_MULTIPLIER,
    jitter_factor=DEFAULT_JITTER_FACTOR,
    max_interval_seconds=DEFAULT_MAX_INTERVAL_SECONDS,
)


def merge_policy(policy: Optional[RetryPolicy] = None) -> RetryPolicy:
    """
    Merge policy with defaults.

    Args:
        policy: User-provided policy

    Returns:
        The given policy, or the default one
    """
    if policy is None:
        return DEFAULT_RETRY_POLICY
    return policy


def is_retryable_status(status_code: int, headers: HeadersLike = None) -> bool:
    """
    Check if a response status should trigger a retry.

    413 Payload Too Large is only retried when the server tells when to come
    back through a Retry-After header.

    Args:
        status_code: The HTTP status code
        headers: The response headers

    Returns:
        Whether the status is retryable
    """
    if status_code in RETRYABLE_STATUS_CODES:
        return True
    if status_code in RETRY_AFTER_REQUIRED_STATUS_CODES:
        return bool(as_headers(headers).get(HEADER_RETRY_AFTER))
    return False


def is_idempotent_method(method: str, headers: HeadersLike = None) -> bool:
    """
    Check if a request can be safely repeated.

    Any method is considered idempotent when the request carries an
    Idempotency-Key (or legacy X-Idempotency-Key) header.

    Args:
        method: The HTTP method
        headers: The request headers

    Returns:
        Whether the request is idempotent
    """
    if method.upper() in IDEMPOTENT_METHODS:
        return True
    headers = as_headers(headers)
    return bool(headers.get(HEADER_IDEMPOTENCY_KEY) or headers.get(HEADER_X_IDEMPOTENCY_KEY))


def parse_retry_after(value: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """
    Parse Retry-After header value.

    The Retry-After header can contain either:
    - A number of seconds to wait
    - An HTTP-date indicating when to retry

    Args:
        value: Retry-After header value
        now: Reference time for HTTP-dates. Default: current time

    Returns:
        Wait time in seconds (never negative), or None if absent or invalid
    """
    if not value:
        return None

    value = value.strip()

    # Try parsing as seconds (ASCII digits only, optionally signed)
    digits = value.lstrip("+-")
    if digits.isascii() and digits.isdigit():
        try:
            return float(max(0, int(value)))
        except ValueError:
            pass

    # Try parsing as HTTP-date
    try:
        date = parse_http_date(value)
    except ValueError:
        return None

    now = now or datetime.now(timezone.utc)
    return max(0.0, (date - now).total_seconds())


def compute_wait_duration(
    interval: float,
    jitter_factor: float,
    headers: HeadersLike = None,
) -> float:
    """
    Compute how long to wait before the next attempt.

    A parseable Retry-After header takes precedence over the backoff
    interval. Otherwise the interval is randomized in the half-open range
    ``[interval - delta, interval + delta)`` with ``delta = jitter_factor * interval``.

    Args:
        interval: Current backoff interval (seconds)
        jitter_factor: Jitter factor (0-1)
        headers: Headers of the response that triggered the retry

    Returns:
        Delay in seconds
    """
    retry_after = parse_retry_after(as_headers(headers).get(HEADER_RETRY_AFTER))
    if retry_after is not None:
        return retry_after

    if jitter_factor == 0:
        return interval

    delta = jitter_factor * interval
    min_interval = interval - delta

    return min_interval + random.random() * delta * 2


def next_interval(interval: float, policy: RetryPolicy) -> float:
    """
    Grow the backoff interval after a retry.

    Args:
        interval: Current interval (seconds)
        policy: Retry policy

    Returns:
        ``interval * multiplier``, capped at the max interval
    """
    return min(interval * policy.interval_multiplier, policy.max_interval_seconds)


def initial_interval(policy: RetryPolicy) -> float:
    """Return the first backoff interval of a policy, capped at the max interval."""
    return min(policy.initial_interval_seconds, policy.max_interval_seconds)


def sync_wait(seconds: float, cancel_event: Optional[CancelEvent] = None) -> bool:
    """
    Wait for a duration, or until the cancel event is set (sync).

    Args:
        seconds: Duration in seconds, capped at MAX_WAIT_SECONDS
        cancel_event: Optional threading.Event

    Returns:
        True if the wait was cancelled
    """
    seconds = min(seconds, MAX_WAIT_SECONDS)
    if cancel_event is None:
        time.sleep(seconds)
        return False
    if not isinstance(cancel_event, threading.Event):
        raise TypeError(f"sync cancel event must be a threading.Event, got {type(cancel_event).__name__}")
    return cancel_event.wait(seconds)


async def async_wait(seconds: float, cancel_event: Optional[CancelEvent] = None) -> bool:
    """
    Wait for a duration, or until the cancel event is set (async).

    Args:
        seconds: Duration in seconds, capped at MAX_WAIT_SECONDS
        cancel_event: Optional asyncio.Event

    Returns:
        True if the wait was cancelled
    """
    seconds = min(seconds, MAX_WAIT_SECONDS)
    if cancel_event is None:
        await asyncio.sleep(seconds)
        return False
    if not isinstance(cancel_event, asyncio.Event):
        raise TypeError(f"async cancel event must be an asyncio.Event, got {type(cancel_event).__name__}")
    if cancel_event.is_set():
        return True
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        return False
    return True
