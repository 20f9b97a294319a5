"""
HTTP header names and helpers.

All lookups are case-insensitive; plain mappings are wrapped in
``httpx.Headers`` before use.
"""
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Mapping, Optional, Union

import httpx


HeadersLike = Union[httpx.Headers, Mapping[str, str], None]


# Standard headers
HEADER_ACCEPT = "Accept"
HEADER_ACCEPT_ENCODING = "Accept-Encoding"
HEADER_AGE = "Age"
HEADER_ALLOW = "Allow"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CACHE_CONTROL = "Cache-Control"
HEADER_CONNECTION = "Connection"
HEADER_CONTENT_ENCODING = "Content-Encoding"
HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_DATE = "Date"
HEADER_ETAG = "Etag"
HEADER_EXPIRES = "Expires"
HEADER_FORWARDED = "Forwarded"
HEADER_HOST = "Host"
HEADER_IF_MATCH = "If-Match"
HEADER_IF_NONE_MATCH = "If-None-Match"
HEADER_LAST_MODIFIED = "Last-Modified"
HEADER_LOCATION = "Location"
HEADER_PRAGMA = "Pragma"
HEADER_RETRY_AFTER = "Retry-After"
HEADER_SERVER = "Server"
HEADER_TRANSFER_ENCODING = "Transfer-Encoding"
HEADER_USER_AGENT = "User-Agent"
HEADER_VARY = "Vary"
HEADER_VIA = "Via"
HEADER_WWW_AUTHENTICATE = "WWW-Authenticate"

# Non-standard but widely used headers
HEADER_IDEMPOTENCY_KEY = "Idempotency-Key"
HEADER_X_FORWARDED_FOR = "X-Forwarded-For"
HEADER_X_FORWARDED_HOST = "X-Forwarded-Host"
HEADER_X_FORWARDED_PROTO = "X-Forwarded-Proto"
# Legacy alias of Idempotency-Key
HEADER_X_IDEMPOTENCY_KEY = "X-Idempotency-Key"

# Cache-Control directives
CACHE_CONTROL_MAX_AGE = "max-age"
CACHE_CONTROL_MUST_REVALIDATE = "must-revalidate"
CACHE_CONTROL_NO_CACHE = "no-cache"
CACHE_CONTROL_NO_STORE = "no-store"
CACHE_CONTROL_PRIVATE = "private"
CACHE_CONTROL_PUBLIC = "public"
CACHE_CONTROL_S_MAXAGE = "s-maxage"


class MissingDateHeaderError(ValueError):
    """Raised when a Date header is required but absent."""


def as_headers(headers: HeadersLike) -> httpx.Headers:
    """Return headers as a case-insensitive httpx.Headers instance."""
    if isinstance(headers, httpx.Headers):
        return headers
    return httpx.Headers(headers or {})


def header_exist(headers: HeadersLike, key: str) -> bool:
    """Return whether the key exists in headers."""
    return key in as_headers(headers)


def header_values(headers: HeadersLike, key: str) -> list[str]:
    """
    Return all values associated with the key.

    Values from multiple occurrences are concatenated and comma-separated
    lists are split, as allowed for list-based header fields.

    Args:
        headers: Headers to search
        key: Header name (case-insensitive)

    Returns:
        Trimmed values, empty if the key does not exist
    """
    values: list[str] = []
    for value in as_headers(headers).get_list(key):
        values.extend(field.strip() for field in value.split(","))
    return values


def header_key_values(headers: HeadersLike, key: str) -> Optional[dict[str, str]]:
    """
    Return the key/value directives of a header, or None if it does not exist.

    Directives without a value map to an empty string, e.g.
    ``Cache-Control: no-cache, max-age=60`` gives
    ``{"no-cache": "", "max-age": "60"}``.
    """
    if not header_exist(headers, key):
        return None

    directives: dict[str, str] = {}
    for value in header_values(headers, key):
        parts = value.split("=")
        if len(parts) > 1:
            directives[parts[0]] = parts[1]
        else:
            directives[value] = ""
    return directives


def parse_http_date(value: str) -> datetime:
    """
    Parse an HTTP date (RFC 1123, RFC 850 or asctime format).

    Dates without zone information are taken as UTC.

    Raises:
        ValueError: If the value is not a valid HTTP date
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, IndexError) as e:
        raise ValueError(f"invalid HTTP date: {value!r}") from e
    if parsed is None:
        raise ValueError(f"invalid HTTP date: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_header_date(headers: HeadersLike) -> datetime:
    """
    Parse the Date header.

    Raises:
        MissingDateHeaderError: If there is no Date header
        ValueError: If the Date header is malformed
    """
    date = as_headers(headers).get(HEADER_DATE, "")
    if not date:
        raise MissingDateHeaderError("no date header")
    return parse_http_date(date)


def replace_header(headers: Optional[httpx.Headers], prefix: str, key: str, *values: str) -> None:
    """
    Set the values of key, preserving the previous ones under a prefixed key.

    Old values move to ``<prefix>-<key>``; if that key is already taken, its
    values shift to ``<prefix>-1-<key>``, ``<prefix>-2-<key>`` and so on.
    Multiple values are stored comma-joined.

    Example:
        headers = httpx.Headers({"Content-Type": "text/html"})
        replace_header(headers, "X-Original", "Content-Type", "application/json")
        # X-Original-Content-Type: text/html
    """
    if headers is None:
        return

    prefixed_key = f"{prefix}-{key}"

    if prefixed_key in headers:
        moved = headers.get_list(prefixed_key)
        i = 1
        while True:
            slot = f"{prefix}-{i}-{key}"
            previous = headers.get_list(slot) if slot in headers else None
            _set_values(headers, slot, moved)
            if previous is None:
                break
            moved = previous
            i += 1

    if key in headers:
        _set_values(headers, prefixed_key, headers.get_list(key))

    _set_values(headers, key, list(values))


def _set_values(headers: httpx.Headers, key: str, values: list[str]) -> None:
    headers[key] = ", ".join(values)
