r"""Exceptions raised by the retry controller.

Every terminal failure of a retry run surfaces as exactly one of these
exception kinds, except failures of the fallback operation which are
propagated unchanged.
"""

from __future__ import annotations

__all__ = [
    "NonRetryableError",
    "RetriesExhaustedError",
    "RetryError",
    "TimeoutExceededError",
]


class RetryError(Exception):
    """Base class for all errors raised by retryit."""


class NonRetryableError(RetryError):
    """Raised when the ``should_retry`` predicate rejects a failure.

    The run is aborted immediately, regardless of the remaining retry
    budget.

    Args:
        error: The original exception raised by the operation.
        attempts: The number of operation invocations performed.

    Example:
        ```pycon
        >>> from retryit.exceptions import NonRetryableError
        >>> exc = NonRetryableError(ValueError("bad input"), attempts=1)
        >>> exc.error
        ValueError('bad input')
        >>> str(exc)
        'non-retryable error after 1 attempt(s): bad input'

        ```
    """

    def __init__(self, error: Exception, attempts: int) -> None:
        super().__init__(f"non-retryable error after {attempts} attempt(s): {error}")
        self.error = error
        self.attempts = attempts


class RetriesExhaustedError(RetryError):
    """Raised when every attempt failed and no fallback is configured.

    Args:
        error: The exception raised by the last attempt.
        attempts: The number of operation invocations performed.

    Example:
        ```pycon
        >>> from retryit.exceptions import RetriesExhaustedError
        >>> exc = RetriesExhaustedError(RuntimeError("Persistent error"), attempts=4)
        >>> exc.attempts
        4
        >>> str(exc)
        'retries exhausted after 4 attempt(s): Persistent error'

        ```
    """

    def __init__(self, error: Exception, attempts: int) -> None:
        super().__init__(f"retries exhausted after {attempts} attempt(s): {error}")
        self.error = error
        self.attempts = attempts


class TimeoutExceededError(RetryError, TimeoutError):
    """Raised when the overall timeout elapses before the run finishes.

    This error is never derived from an operation error: it is raised
    solely by the timer racing the attempt loop.

    Args:
        timeout: The timeout in seconds that was exceeded.

    Example:
        ```pycon
        >>> from retryit.exceptions import TimeoutExceededError
        >>> raise TimeoutExceededError(1.5)
        Traceback (most recent call last):
            ...
        retryit.exceptions.TimeoutExceededError: Retry timeout exceeded (1.5s)

        ```
    """

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Retry timeout exceeded ({timeout}s)")
        self.timeout = timeout
