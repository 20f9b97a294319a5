"""
Retry transport wrapper for httpx's compose pattern.
"""
from http_retry import (
    RetryPolicy,
    RetryPolicyError,
    RetryInfo,
    ClientTrace,
    DEFAULT_RETRY_POLICY,
)
from .transport import RetryTransport, SyncRetryTransport
from .request import (
    is_request_idempotent,
    is_request_rewindable,
    clone_request,
    rewind_request,
    arewind_request,
)
from .response import is_response_retryable, drain_close, adrain_close
from .factory import (
    compose_transport,
    compose_sync_transport,
    create_retry_client,
    create_retry_sync_client,
    create_retry_transport_wrapper,
    RETRY_PRESETS,
)


__all__ = [
    # Re-exported types from base package
    "RetryPolicy",
    "RetryPolicyError",
    "RetryInfo",
    "ClientTrace",
    "DEFAULT_RETRY_POLICY",
    # Transport wrappers
    "RetryTransport",
    "SyncRetryTransport",
    # Request / response helpers
    "is_request_idempotent",
    "is_request_rewindable",
    "clone_request",
    "rewind_request",
    "arewind_request",
    "is_response_retryable",
    "drain_close",
    "adrain_close",
    # Factory functions
    "compose_transport",
    "compose_sync_transport",
    "create_retry_client",
    "create_retry_sync_client",
    "create_retry_transport_wrapper",
    "RETRY_PRESETS",
]

__version__ = "1.0.0"
