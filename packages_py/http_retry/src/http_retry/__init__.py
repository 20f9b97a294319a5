"""
Retry policy for HTTP requests: backoff with jitter, Retry-After support and
idempotency analysis.
"""
from .types import (
    RetryPolicy,
    RetryPolicyError,
    RetryInfo,
    ClientTrace,
    IDEMPOTENT_METHODS,
    RETRYABLE_STATUS_CODES,
    RETRY_AFTER_REQUIRED_STATUS_CODES,
)
from .config import (
    DEFAULT_RETRY_POLICY,
    MAX_WAIT_SECONDS,
    compute_wait_duration,
    initial_interval,
    next_interval,
    is_retryable_status,
    is_idempotent_method,
    parse_retry_after,
    merge_policy,
    async_wait,
    sync_wait,
)
from .trace import (
    RETRY_TRACE_EXTENSION,
    RETRY_CANCEL_EXTENSION,
    GET_BODY_EXTENSION,
    context_client_trace,
    with_client_trace,
    request_cancel_event,
    with_cancel_event,
)
from .headers import (
    HEADER_DATE,
    HEADER_IDEMPOTENCY_KEY,
    HEADER_RETRY_AFTER,
    HEADER_X_IDEMPOTENCY_KEY,
    MissingDateHeaderError,
    header_exist,
    header_key_values,
    header_values,
    parse_header_date,
    parse_http_date,
    replace_header,
)


__all__ = [
    # Types
    "RetryPolicy",
    "RetryPolicyError",
    "RetryInfo",
    "ClientTrace",
    "IDEMPOTENT_METHODS",
    "RETRYABLE_STATUS_CODES",
    "RETRY_AFTER_REQUIRED_STATUS_CODES",
    # Config
    "DEFAULT_RETRY_POLICY",
    "MAX_WAIT_SECONDS",
    "compute_wait_duration",
    "initial_interval",
    "next_interval",
    "is_retryable_status",
    "is_idempotent_method",
    "parse_retry_after",
    "merge_policy",
    "async_wait",
    "sync_wait",
    # Trace
    "RETRY_TRACE_EXTENSION",
    "RETRY_CANCEL_EXTENSION",
    "GET_BODY_EXTENSION",
    "context_client_trace",
    "with_client_trace",
    "request_cancel_event",
    "with_cancel_event",
    # Headers
    "HEADER_DATE",
    "HEADER_IDEMPOTENCY_KEY",
    "HEADER_RETRY_AFTER",
    "HEADER_X_IDEMPOTENCY_KEY",
    "MissingDateHeaderError",
    "header_exist",
    "header_key_values",
    "header_values",
    "parse_header_date",
    "parse_http_date",
    "replace_header",
]


__version__ = "1.0.0"
