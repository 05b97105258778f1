r"""retryit - Retry fallible async operations under a configurable policy.

This package provides a single control-flow primitive: run a zero-argument
async operation, retry it when it fails, wait between attempts, give up
after a time budget, and optionally fall back to an alternate operation.

Key Features:
    - Bounded retries with a fixed or exponential (doubling plus jitter) delay
    - Custom predicates deciding which failures are retryable
    - Overall timeout racing the whole run, with cancellation of the
      in-flight attempt
    - Fallback operation executed once the retry budget is spent
    - on_retry hook for observability
    - Distinct exception for every terminal failure
    - Structured (JSON) logging of the retry lifecycle

Example:
    ```pycon
    >>> import asyncio
    >>> from retryit import RetryPolicy, retry
    >>> async def fetch_data() -> str:
    ...     return "payload"
    ...
    >>> async def fallback() -> str:
    ...     return "cached payload"
    ...
    >>> policy = RetryPolicy(
    ...     max_retries=3,
    ...     base_delay=1.0,
    ...     exponential_backoff=True,
    ...     timeout=10.0,
    ...     fallback=fallback,
    ... )
    >>> asyncio.run(retry(fetch_data, policy))
    'payload'

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_JITTER",
    "DEFAULT_MAX_RETRIES",
    "AsyncRetryExecutor",
    "ConstantBackoff",
    "ExponentialBackoff",
    "NonRetryableError",
    "RetriesExhaustedError",
    "RetryError",
    "RetryPolicy",
    "TimeoutExceededError",
    "__version__",
    "retry",
    "retryable",
]

from importlib.metadata import PackageNotFoundError, version

from retryit.backoff import ConstantBackoff, ExponentialBackoff
from retryit.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_JITTER,
    DEFAULT_MAX_RETRIES,
    RetryPolicy,
)
from retryit.exceptions import (
    NonRetryableError,
    RetriesExhaustedError,
    RetryError,
    TimeoutExceededError,
)
from retryit.executor import AsyncRetryExecutor
from retryit.retry import retry, retryable

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
