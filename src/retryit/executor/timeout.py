r"""Race of a retry run against an overall timeout.

The attempt loop runs as its own task and a timer runs alongside it;
whichever finishes first decides the outcome of the run. When the timer
wins, the caller gets a ``TimeoutExceededError`` and the loop task is
either cancelled or abandoned, depending on the policy.
"""

from __future__ import annotations

__all__ = ["run_with_timeout"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from retryit.exceptions import TimeoutExceededError
from retryit.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


def _discard_outcome(task: asyncio.Task[Any]) -> None:
    """Consume the outcome of an abandoned task.

    Retrieving the exception keeps asyncio from reporting it as never
    retrieved once the caller has already received a timeout.
    """
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"abandoned retry run finished with {type(exc).__name__}: {exc}")
    else:
        logger.debug("abandoned retry run finished successfully, result discarded")


async def run_with_timeout(
    coro: Coroutine[Any, Any, T],
    timeout: float,
    cancel_on_timeout: bool = True,
) -> T:
    """Run a coroutine, failing if it does not finish within timeout.

    Args:
        coro: The coroutine driving the attempt loop.
        timeout: The time budget in seconds.
        cancel_on_timeout: Whether to cancel the coroutine's task when the
            timer fires. If False the task keeps running in the
            background. Either way, its eventual outcome is consumed
            and logged at debug level.

    Returns:
        The value returned by the coroutine.

    Raises:
        TimeoutExceededError: If the timer fires first.
        Exception: Whatever the coroutine raises, if it finishes first.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryit.executor.timeout import run_with_timeout
        >>> async def main():
        ...     return await run_with_timeout(asyncio.sleep(0, result="done"), timeout=1.0)
        ...
        >>> asyncio.run(main())
        'done'

        ```
    """
    task = asyncio.ensure_future(coro)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task in done:
        return task.result()

    log_structured(
        logger,
        logging.WARNING,
        f"retry timeout exceeded after {timeout}s",
        timeout=timeout,
        cancelled=cancel_on_timeout,
    )
    task.add_done_callback(_discard_outcome)
    if cancel_on_timeout:
        task.cancel()
    raise TimeoutExceededError(timeout) from None
