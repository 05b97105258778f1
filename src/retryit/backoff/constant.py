r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from retryit.backoff.base import BaseBackoffStrategy


class ConstantBackoff(BaseBackoffStrategy):
    """Constant backoff strategy.

    Every retry waits the policy's ``base_delay``. This is the strategy
    used when exponential backoff is disabled.

    Example:
        ```pycon
        >>> from retryit.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff()
        >>> backoff.next_delay(0.1)
        0.1

        ```
    """

    def next_delay(self, delay: float) -> float:
        return delay
