r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that drives repeated
invocations of a fallible async operation according to a RetryPolicy,
and produces either the operation's result, the fallback's result, or a
single terminal error.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from retryit.callbacks import invoke_on_retry
from retryit.exceptions import NonRetryableError, RetriesExhaustedError
from retryit.executor.decider import RetryDecider, RetryDecision
from retryit.executor.timeout import run_with_timeout
from retryit.utils.structured_logging import bind_run_id, log_structured, reset_run_id

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from retryit.config import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncRetryExecutor:
    """Executes an async operation with automatic retry logic.

    The executor is stateless between runs: the attempt counter and the
    current delay are local to each call of ``execute``, so one executor
    can serve any number of concurrent runs.

    A run goes through the following states:

    - Attempting: the operation is awaited. A result ends the run.
    - Checking the failure with the RetryDecider:
        - ABORT: raise ``NonRetryableError`` without waiting.
        - EXHAUSTED: run the fallback once, or raise ``RetriesExhaustedError``.
        - RETRY: call the on_retry hook, sleep, grow the delay, attempt again.

    When the policy sets a timeout, the whole loop races against a timer
    and ``TimeoutExceededError`` preempts every other outcome.

    Attributes:
        policy: The retry policy.
        decider: Logic for classifying failed attempts.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryit import AsyncRetryExecutor, RetryPolicy
        >>> async def fetch() -> str:
        ...     return "data"
        ...
        >>> executor = AsyncRetryExecutor(RetryPolicy(max_retries=2, base_delay=0.01))
        >>> asyncio.run(executor.execute(fetch))
        'data'

        ```
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy
        self.decider: RetryDecider = RetryDecider(policy.max_retries, policy.should_retry)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy!r})"

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Execute the operation with automatic retry logic.

        Attempts the operation up to ``max_retries + 1`` times. Attempts
        never overlap and the delay between them is a non-blocking
        ``asyncio.sleep``.

        The operation's own exceptions are never re-raised as is: the
        last one is available as ``.error`` (and ``__cause__``) of the
        ``NonRetryableError`` or ``RetriesExhaustedError`` raised.

        Args:
            operation: Zero-argument coroutine function to run. It is
                invoked once per attempt; making repeated invocations safe
                is the caller's responsibility.

        Returns:
            The result of the first successful attempt, or the result of
            the fallback when every attempt failed.

        Raises:
            NonRetryableError: If ``should_retry`` rejected a failure.
            RetriesExhaustedError: If every attempt failed and no fallback
                is configured.
            TimeoutExceededError: If the policy timeout elapsed first.
            Exception: Any error raised by the fallback, unchanged.
        """
        token = bind_run_id()
        try:
            if self.policy.timeout is None:
                return await self._run_attempts(operation)
            return await run_with_timeout(
                self._run_attempts(operation),
                timeout=self.policy.timeout,
                cancel_on_timeout=self.policy.cancel_on_timeout,
            )
        finally:
            reset_run_id(token)

    async def _run_attempts(self, operation: Callable[[], Awaitable[T]]) -> T:
        max_retries = self.policy.max_retries
        backoff = self.policy.create_backoff()
        retries_done = 0
        current_delay = self.policy.base_delay

        while True:
            attempt = retries_done + 1
            log_structured(
                logger,
                logging.DEBUG,
                f"attempt {attempt}: invoking operation",
                attempt=attempt,
                max_retries=max_retries,
            )
            try:
                result = await operation()
            except Exception as exc:
                error = exc
            else:
                log_structured(
                    logger,
                    logging.DEBUG,
                    f"operation succeeded on attempt {attempt}",
                    attempt=attempt,
                )
                return result

            decision = self.decider.decide(error, retries_done)

            if decision is RetryDecision.ABORT:
                log_structured(
                    logger,
                    logging.WARNING,
                    f"non-retryable error on attempt {attempt}: {error}",
                    attempt=attempt,
                    error=repr(error),
                )
                raise NonRetryableError(error, attempts=attempt) from error

            if decision is RetryDecision.EXHAUSTED:
                log_structured(
                    logger,
                    logging.WARNING,
                    f"retries exhausted after {attempt} attempts: {error}",
                    attempt=attempt,
                    max_retries=max_retries,
                    error=repr(error),
                )
                if self.policy.fallback is not None:
                    return await self._run_fallback()
                raise RetriesExhaustedError(error, attempts=attempt) from error

            retries_done += 1
            log_structured(
                logger,
                logging.DEBUG,
                f"attempt {attempt} failed, retrying in {current_delay:.3f}s: {error}",
                attempt=attempt,
                retry=retries_done,
                delay=current_delay,
                error=repr(error),
            )
            await invoke_on_retry(self.policy.on_retry, attempt=retries_done, error=error)
            await asyncio.sleep(current_delay)
            current_delay = backoff.next_delay(current_delay)

    async def _run_fallback(self) -> Any:
        log_structured(logger, logging.INFO, "executing fallback")
        # Fallback failures propagate unchanged and are never retried
        return await self.policy.fallback()
