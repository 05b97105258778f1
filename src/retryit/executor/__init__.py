r"""Executor package implementing the retry controller.

Public API:
    - AsyncRetryExecutor: Asynchronous retry executor
    - RetryDecider: Logic for classifying failed attempts
    - RetryDecision: Outcome of a failed attempt
    - run_with_timeout: Race a coroutine against an overall timeout
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "RetryDecider",
    "RetryDecision",
    "run_with_timeout",
]

from retryit.executor.decider import RetryDecider, RetryDecision
from retryit.executor.executor_async import AsyncRetryExecutor
from retryit.executor.timeout import run_with_timeout
