r"""Backoff strategies controlling how the delay between retries
evolves."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_JITTER",
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
]

from retryit.backoff.base import BaseBackoffStrategy
from retryit.backoff.constant import ConstantBackoff
from retryit.backoff.exponential import DEFAULT_MAX_JITTER, ExponentialBackoff
