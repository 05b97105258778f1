r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how the delay between two retries
    evolves over a run. The executor starts from the policy's
    ``base_delay`` and, after each wait, asks the strategy for the delay
    to use before the following retry.
    """

    @abstractmethod
    def next_delay(self, delay: float) -> float:
        """Calculate the delay for the next retry.

        Args:
            delay: The delay in seconds that was just applied.

        Returns:
            The delay in seconds to apply before the following retry.
            Implementations must never return less than ``delay``.
        """
