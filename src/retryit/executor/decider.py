r"""Retry decision logic for failed attempts.

This module provides the RetryDecider class that classifies a failed
attempt into one of three outcomes: retry it, abort the run because the
failure is not retryable, or stop because the retry budget is spent.
"""

from __future__ import annotations

__all__ = ["RetryDecider", "RetryDecision"]

import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecision(Enum):
    """Outcome of evaluating a failed attempt.

    Attributes:
        RETRY: Wait, then attempt the operation again.
        ABORT: The failure is not retryable; the run ends immediately.
        EXHAUSTED: The failure is retryable but no retry is left.
    """

    RETRY = "retry"
    ABORT = "abort"
    EXHAUSTED = "exhausted"


class RetryDecider:
    """Decides what happens after a failed attempt.

    The ``should_retry`` predicate is evaluated first, so a non-retryable
    failure aborts the run regardless of the remaining budget.

    Args:
        max_retries: Number of retries allowed after the initial attempt.
        should_retry: Optional predicate deciding whether a failure is
            retryable. Every failure is retryable when omitted.

    Example:
        ```pycon
        >>> from retryit.executor.decider import RetryDecider
        >>> decider = RetryDecider(max_retries=1)
        >>> decider.decide(ValueError("boom"), retries_done=0)
        <RetryDecision.RETRY: 'retry'>
        >>> decider.decide(ValueError("boom"), retries_done=1)
        <RetryDecision.EXHAUSTED: 'exhausted'>
        >>> decider = RetryDecider(max_retries=3, should_retry=lambda exc: False)
        >>> decider.decide(ValueError("boom"), retries_done=0)
        <RetryDecision.ABORT: 'abort'>

        ```
    """

    def __init__(
        self,
        max_retries: int,
        should_retry: Callable[[Exception], bool] | None = None,
    ) -> None:
        self.max_retries = max_retries
        self.should_retry = should_retry

    def is_retryable(self, error: Exception) -> bool:
        """Evaluate the should_retry predicate.

        Args:
            error: The failure to evaluate.

        Returns:
            True if the failure may be retried.
        """
        if self.should_retry is None:
            return True
        return bool(self.should_retry(error))

    def decide(self, error: Exception, retries_done: int) -> RetryDecision:
        """Classify a failed attempt.

        Args:
            error: The exception raised by the attempt.
            retries_done: Number of retries already performed in this run
                (0 after the initial attempt failed).

        Returns:
            The decision for this failure.
        """
        if not self.is_retryable(error):
            logger.debug(f"{type(error).__name__} rejected by should_retry")
            return RetryDecision.ABORT
        if retries_done + 1 > self.max_retries:
            return RetryDecision.EXHAUSTED
        return RetryDecision.RETRY
