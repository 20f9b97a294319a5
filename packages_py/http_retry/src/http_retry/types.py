"""
Type definitions for http_retry
"""
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional


class RetryPolicyError(ValueError):
    """Raised when a retry policy is configured with an invalid value."""


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff policy of the retry transport.

    Instances are immutable and validated on construction, so one policy can
    be shared by any number of transports and concurrent requests.
    """

    initial_interval_seconds: float = 0.2
    """Wait before the first retry (seconds). Default: 0.2"""

    interval_multiplier: float = 1.5
    """Growth factor applied to the interval after each retry. Default: 1.5"""

    jitter_factor: float = 0.2
    """Fraction (0-1) of the interval randomized symmetrically. Default: 0.2"""

    max_interval_seconds: float = 30.0
    """Upper bound of the backoff interval (seconds). Default: 30.0"""

    max_retries: Optional[int] = None
    """Maximum number of retries. Default: None (retry until cancelled)"""

    def __post_init__(self) -> None:
        if not self.initial_interval_seconds > 0:
            raise RetryPolicyError(
                f"invalid initial interval value: {self.initial_interval_seconds!r}"
            )
        if not self.interval_multiplier >= 1.0:
            raise RetryPolicyError(
                f"invalid interval multiplier value: {self.interval_multiplier!r}"
            )
        if not 0.0 <= self.jitter_factor <= 1.0:
            raise RetryPolicyError(f"invalid jitter factor value: {self.jitter_factor!r}")
        if not self.max_interval_seconds > 0:
            raise RetryPolicyError(
                f"invalid max interval value: {self.max_interval_seconds!r}"
            )
        if self.max_retries is not None and (
            isinstance(self.max_retries, bool)
            or not isinstance(self.max_retries, int)
            or self.max_retries < 0
        ):
            raise RetryPolicyError(f"invalid max retries value: {self.max_retries!r}")

    def with_options(self, **changes: Any) -> "RetryPolicy":
        """
        Return a copy of the policy with the given fields replaced.

        The copy is validated like any new policy.

        Example:
            policy = DEFAULT_RETRY_POLICY.with_options(jitter_factor=0)
        """
        return replace(self, **changes)


@dataclass(frozen=True)
class RetryInfo:
    """Information about a retry that is about to be made"""

    retry_count: int
    """1-based retry count for the request"""

    status_code: int
    """Status code of the response that triggered the retry"""


@dataclass
class ClientTrace:
    """
    Hooks run at various stages of an outgoing request.

    Any particular hook may be None.
    """

    retry: Optional[Callable[[RetryInfo], None]] = None
    """Called before a retry is made"""


# Idempotent HTTP methods (RFC 9110, section 9.2.2)
IDEMPOTENT_METHODS = frozenset(["GET", "HEAD", "OPTIONS", "PUT", "DELETE", "TRACE"])

# Statuses retried unconditionally
RETRYABLE_STATUS_CODES = frozenset([408, 425, 429, 500, 502, 503, 504])

# Payload Too Large is retried only when the server sends Retry-After
RETRY_AFTER_REQUIRED_STATUS_CODES = frozenset([413])
