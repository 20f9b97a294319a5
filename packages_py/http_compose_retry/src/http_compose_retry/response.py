"""
Response classification and disposal for the retry transport
"""
import logging

import httpx

from http_retry import is_retryable_status

logger = logging.getLogger(__name__)


def is_response_retryable(response: httpx.Response) -> bool:
    """Check if the response status (and Retry-After for 413) allows a retry."""
    return is_retryable_status(response.status_code, response.headers)


def drain_close(response: httpx.Response) -> None:
    """
    Discard the unread body of a response and close it (sync).

    Chunks are dropped as they arrive, nothing is kept on the response.
    Errors while discarding are logged and ignored; the response is closed
    in any case.
    """
    try:
        for _ in response.iter_raw():
            pass
    except (httpx.HTTPError, httpx.StreamError) as e:
        logger.debug(f"Discarding response body failed: {e!r}")
    finally:
        response.close()


async def adrain_close(response: httpx.Response) -> None:
    """Discard the unread body of a response and close it (async)."""
    try:
        async for _ in response.aiter_raw():
            pass
    except (httpx.HTTPError, httpx.StreamError) as e:
        logger.debug(f"Discarding response body failed: {e!r}")
    finally:
        await response.aclose()
