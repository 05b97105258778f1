r"""Invocation of the ``on_retry`` observability hook.

The hook is called as ``on_retry(attempt, error)`` at the point where the
controller has decided to retry a failure, before the delay. It is a
diagnostic side channel, not control flow:

- if it returns an awaitable (e.g., it is a coroutine function), the
  awaitable is awaited before the delay starts;
- if it raises, the exception is logged and the run continues.

Example:
    ```pycon
    >>> import asyncio
    >>> from retryit import retry
    >>> def log_retry(attempt: int, error: Exception) -> None:
    ...     print(f"retry {attempt}: {error}")
    ...
    >>> asyncio.run(retry(fetch, on_retry=log_retry))  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["invoke_on_retry"]

import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


async def invoke_on_retry(
    on_retry: Callable[[int, Exception], Any] | None,
    *,
    attempt: int,
    error: Exception,
) -> None:
    """Invoke the on_retry hook if provided.

    Args:
        on_retry: Optional hook to invoke.
        attempt: The retry number (1-indexed). The first retry is 1.
        error: The failure that is about to be retried.
    """
    if on_retry is None:
        return
    try:
        result = on_retry(attempt, error)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception(f"on_retry hook failed on retry {attempt}, ignoring")
