r"""Ready-made ``should_retry`` predicates.

A predicate receives the exception raised by a failed attempt and returns
whether the failure may be retried. These helpers cover the common cases
(exception types, message fragments, transient HTTP failures raised by
httpx) and can be combined with ``any_of`` and ``all_of``.

Example:
    ```pycon
    >>> from retryit.predicates import any_of, retry_on_exceptions, retry_on_http_status
    >>> should_retry = any_of(retry_on_http_status(), retry_on_exceptions(ConnectionError))
    >>> should_retry(ConnectionResetError())
    True
    >>> should_retry(ValueError("bad input"))
    False

    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_STATUS_CODES",
    "all_of",
    "any_of",
    "retry_on_exceptions",
    "retry_on_http_status",
    "retry_on_message",
    "retry_unless_exceptions",
]

import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable, Collection

logger: logging.Logger = logging.getLogger(__name__)

# HTTP status codes that usually signal a transient failure
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


def retry_on_exceptions(*exc_types: type[BaseException]) -> Callable[[Exception], bool]:
    """Retry only failures that are instances of the given types.

    Args:
        *exc_types: The retryable exception types.

    Returns:
        The predicate.

    Raises:
        ValueError: If no exception type is given.

    Example:
        ```pycon
        >>> from retryit.predicates import retry_on_exceptions
        >>> predicate = retry_on_exceptions(TimeoutError, ConnectionError)
        >>> predicate(TimeoutError())
        True
        >>> predicate(KeyError("missing"))
        False

        ```
    """
    if not exc_types:
        msg = "at least one exception type is required"
        raise ValueError(msg)

    def predicate(error: Exception) -> bool:
        return isinstance(error, exc_types)

    return predicate


def retry_unless_exceptions(*exc_types: type[BaseException]) -> Callable[[Exception], bool]:
    """Retry every failure except instances of the given types.

    Args:
        *exc_types: The non-retryable exception types.

    Returns:
        The predicate.

    Example:
        ```pycon
        >>> from retryit.predicates import retry_unless_exceptions
        >>> predicate = retry_unless_exceptions(PermissionError)
        >>> predicate(PermissionError())
        False
        >>> predicate(RuntimeError())
        True

        ```
    """

    def predicate(error: Exception) -> bool:
        return not isinstance(error, exc_types)

    return predicate


def retry_on_message(*fragments: str) -> Callable[[Exception], bool]:
    """Retry failures whose message contains any of the fragments.

    Args:
        *fragments: Substrings to look for in ``str(error)``.

    Returns:
        The predicate.

    Example:
        ```pycon
        >>> from retryit.predicates import retry_on_message
        >>> predicate = retry_on_message("Retriable error")
        >>> predicate(RuntimeError("Retriable error"))
        True
        >>> predicate(RuntimeError("Non-retriable error"))
        False

        ```
    """

    def predicate(error: Exception) -> bool:
        message = str(error)
        return any(fragment in message for fragment in fragments)

    return predicate


def retry_on_http_status(
    status_codes: Collection[int] = RETRY_STATUS_CODES,
) -> Callable[[Exception], bool]:
    """Retry transient HTTP failures raised by httpx.

    Retries ``httpx.HTTPStatusError`` (as raised by
    ``Response.raise_for_status``) when the response status is in
    ``status_codes``, and every ``httpx.TransportError`` (timeouts,
    connection and protocol errors). Any other failure is not retryable.

    Args:
        status_codes: The retryable HTTP status codes.

    Returns:
        The predicate.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryit.predicates import retry_on_http_status
        >>> predicate = retry_on_http_status()
        >>> request = httpx.Request("GET", "https://api.example.com/data")
        >>> response = httpx.Response(503, request=request)
        >>> predicate(httpx.HTTPStatusError("unavailable", request=request, response=response))
        True
        >>> response = httpx.Response(404, request=request)
        >>> predicate(httpx.HTTPStatusError("not found", request=request, response=response))
        False
        >>> predicate(httpx.ConnectTimeout("timed out"))
        True

        ```
    """
    retryable = frozenset(status_codes)

    def predicate(error: Exception) -> bool:
        if isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            if status_code not in retryable:
                logger.debug(f"HTTP status {status_code} is not retryable")
                return False
            return True
        return isinstance(error, httpx.TransportError)

    return predicate


def any_of(*predicates: Callable[[Exception], bool]) -> Callable[[Exception], bool]:
    """Retry when at least one predicate accepts the failure.

    Args:
        *predicates: The predicates to combine.

    Returns:
        The combined predicate. With no predicates it never retries.
    """

    def predicate(error: Exception) -> bool:
        return any(p(error) for p in predicates)

    return predicate


def all_of(*predicates: Callable[[Exception], bool]) -> Callable[[Exception], bool]:
    """Retry only when every predicate accepts the failure.

    Args:
        *predicates: The predicates to combine.

    Returns:
        The combined predicate. With no predicates it always retries.
    """

    def predicate(error: Exception) -> bool:
        return all(p(error) for p in predicates)

    return predicate
