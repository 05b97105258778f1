r"""Retry policy configuration and defaults.

This module provides the ``RetryPolicy`` dataclass that describes how a
fallible operation is retried: how many times, how long to wait between
attempts, which failures are retryable, how long the whole run may take,
and what to fall back to once the budget is spent.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_JITTER",
    "DEFAULT_MAX_RETRIES",
    "RetryPolicy",
]

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from retryit.backoff import (
    DEFAULT_MAX_JITTER,
    BaseBackoffStrategy,
    ConstantBackoff,
    ExponentialBackoff,
)
from retryit.utils.validation import validate_callable, validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


# Default maximum number of retry attempts
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Default delay in seconds before the first retry
# With exponential backoff: 0.1s, then ~0.2s, then ~0.4s
DEFAULT_BASE_DELAY = 0.1


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration of a retry run.

    A policy is immutable: the same instance can be shared by any number
    of concurrent runs, each of which keeps its own attempt counter and
    current delay.

    Args:
        max_retries: Number of retry attempts after the initial attempt.
            Must be >= 0.
        base_delay: Delay in seconds before the first retry. Must be >= 0.
        exponential_backoff: Whether to double the delay after each retry
            and add a random jitter.
        max_jitter: Upper bound in seconds of the jitter added at each
            doubling. Only used with exponential backoff. Must be >= 0.
        on_retry: Optional hook called as ``on_retry(attempt, error)``
            each time a failure is about to be retried. The attempt
            number starts at 1. If the hook returns an awaitable it is
            awaited; if it raises, the error is logged and ignored.
        should_retry: Optional predicate called with each failure. The
            run aborts with ``NonRetryableError`` when it returns False.
            Every failure is retryable when omitted.
        timeout: Optional wall-clock budget in seconds for the whole run,
            including delays. Must be > 0 if provided.
        fallback: Optional zero-argument coroutine function executed once
            when the retry budget is exhausted. Its result is returned in
            place of an error; its own failures are not retried.
        backoff_strategy: Optional custom backoff strategy. Takes
            precedence over ``exponential_backoff`` and ``max_jitter``.
        cancel_on_timeout: Whether the in-flight attempt is cancelled when
            the timeout fires. If False the attempt keeps running in the
            background and its outcome is discarded.

    Example:
        ```pycon
        >>> from retryit.config import RetryPolicy
        >>> policy = RetryPolicy()  # Use defaults
        >>> policy.max_retries
        3
        >>> policy = RetryPolicy(max_retries=5, exponential_backoff=True)
        >>> merged = policy.merge(max_retries=10)
        >>> merged.max_retries
        10
        >>> policy.max_retries  # Original unchanged
        5

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    exponential_backoff: bool = False
    max_jitter: float = DEFAULT_MAX_JITTER
    on_retry: Callable[[int, Exception], Any] | None = None
    should_retry: Callable[[Exception], bool] | None = None
    timeout: float | None = None
    fallback: Callable[[], Awaitable[Any]] | None = None
    backoff_strategy: BaseBackoffStrategy | None = None
    cancel_on_timeout: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            TypeError: If max_retries is not an integer or a hook is not
                callable.
            ValueError: If any numeric parameter fails validation.
        """
        validate_retry_params(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_jitter=self.max_jitter,
            timeout=self.timeout,
        )
        validate_callable("on_retry", self.on_retry)
        validate_callable("should_retry", self.should_retry)
        validate_callable("fallback", self.fallback)
        if self.backoff_strategy is not None and not isinstance(
            self.backoff_strategy, BaseBackoffStrategy
        ):
            msg = (
                "backoff_strategy must be a BaseBackoffStrategy, "
                f"got {type(self.backoff_strategy).__name__}"
            )
            raise TypeError(msg)

    def create_backoff(self) -> BaseBackoffStrategy:
        """Create the backoff strategy used by a run.

        Returns:
            ``backoff_strategy`` if set, an ``ExponentialBackoff`` when
            ``exponential_backoff`` is enabled, else a ``ConstantBackoff``.

        Example:
            ```pycon
            >>> from retryit.backoff import ConstantBackoff
            >>> from retryit.config import RetryPolicy
            >>> isinstance(RetryPolicy().create_backoff(), ConstantBackoff)
            True
            >>> RetryPolicy(exponential_backoff=True, max_jitter=0.05).create_backoff()
            ExponentialBackoff(multiplier=2.0, max_jitter=0.05, max_delay=None)

            ```
        """
        if self.backoff_strategy is not None:
            return self.backoff_strategy
        if self.exponential_backoff:
            return ExponentialBackoff(max_jitter=self.max_jitter)
        return ConstantBackoff()

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with specified parameters overridden.

        Only non-None override values are applied, so callers can forward
        optional keyword arguments without clobbering the policy.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new, validated RetryPolicy instance.

        Raises:
            TypeError: If an override does not name a policy field.

        Example:
            ```pycon
            >>> from retryit.config import RetryPolicy
            >>> policy = RetryPolicy(max_retries=3)
            >>> policy.merge(max_retries=5, timeout=None).max_retries
            5

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the policy to a dictionary.

        Returns:
            Dictionary mapping each field name to its value.

        Example:
            ```pycon
            >>> from retryit.config import RetryPolicy
            >>> RetryPolicy(max_retries=5).to_dict()["max_retries"]
            5

            ```
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}
