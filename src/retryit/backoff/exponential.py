r"""Exponential backoff strategy with additive jitter."""

from __future__ import annotations

__all__ = ["DEFAULT_MAX_JITTER", "ExponentialBackoff"]

import logging
import random

from retryit.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)

# Upper bound in seconds of the random jitter added at each doubling
DEFAULT_MAX_JITTER = 0.1


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates the next delay as:
    ``delay * multiplier + random.uniform(0, max_jitter)``, with an
    optional ``max_delay`` cap. The jitter accumulates from one retry to
    the next, so with ``base_delay=b`` and the default multiplier the
    i-th delay lies in ``[b * 2**(i-1), b * 2**(i-1) + max_jitter * (2**(i-1) - 1)]``.

    Args:
        multiplier: Growth factor applied to the previous delay. Must be >= 1.
        max_jitter: Upper bound in seconds of the uniform random jitter
            added to each new delay. Set to 0 to disable jitter.
        max_delay: Optional maximum delay cap in seconds. The cap never
            makes a delay shorter than the previous one.

    Example:
        ```pycon
        >>> from retryit.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(max_jitter=0.0)
        >>> backoff.next_delay(0.1)
        0.2
        >>> backoff.next_delay(0.2)
        0.4
        >>> backoff = ExponentialBackoff(max_jitter=0.0, max_delay=0.5)
        >>> backoff.next_delay(0.4)
        0.5

        ```
    """

    def __init__(
        self,
        multiplier: float = 2.0,
        max_jitter: float = DEFAULT_MAX_JITTER,
        max_delay: float | None = None,
    ) -> None:
        if multiplier < 1:
            msg = f"multiplier must be >= 1, got {multiplier}"
            raise ValueError(msg)
        if max_jitter < 0:
            msg = f"max_jitter must be >= 0, got {max_jitter}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.multiplier = multiplier
        self.max_jitter = max_jitter
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(multiplier={self.multiplier}, "
            f"max_jitter={self.max_jitter}, max_delay={self.max_delay})"
        )

    def next_delay(self, delay: float) -> float:
        """Double the delay and add jitter.

        Args:
            delay: The delay in seconds that was just applied.

        Returns:
            The grown delay, capped at ``max_delay`` if set but never
            below ``delay``.
        """
        jitter = random.uniform(0, self.max_jitter) if self.max_jitter > 0 else 0.0  # noqa: S311
        new_delay = delay * self.multiplier + jitter
        if self.max_delay is not None and new_delay > self.max_delay:
            logger.debug(f"Capping delay from {new_delay:.3f}s to {self.max_delay:.3f}s")
            new_delay = max(delay, self.max_delay)
        return new_delay
