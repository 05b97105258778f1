r"""Functional API for retrying async operations.

This module provides ``retry``, which runs a zero-argument coroutine
function under a retry policy, and ``retryable``, a decorator applying
the same logic to every call of a coroutine function.

Example:
    ```pycon
    >>> import asyncio
    >>> from retryit import retry
    >>> async def fetch_data() -> str:
    ...     return "payload"
    ...
    >>> asyncio.run(retry(fetch_data, max_retries=3, base_delay=0.5, exponential_backoff=True))
    'payload'

    ```
"""

from __future__ import annotations

__all__ = ["retry", "retryable"]

import functools
import inspect
from typing import TYPE_CHECKING, Any, TypeVar

from retryit.config import RetryPolicy
from retryit.executor import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")


def _build_policy(policy: RetryPolicy | None, overrides: dict[str, Any]) -> RetryPolicy:
    if policy is None:
        return RetryPolicy(**overrides)
    return policy.merge(**overrides)


async def retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    **overrides: Any,
) -> T:
    """Run an async operation with automatic retry logic.

    Terminal failures of the operation are wrapped, not re-raised as is:
    callers interested in the original exception type must inspect
    ``.error`` (also set as ``__cause__``) of ``NonRetryableError`` and
    ``RetriesExhaustedError``. Errors raised by the fallback propagate
    unchanged.

    Args:
        operation: Zero-argument coroutine function to run. It is invoked
            once per attempt.
        policy: Optional retry policy. Defaults to ``RetryPolicy()``.
        **overrides: Policy fields overriding those of ``policy``
            (e.g., ``max_retries=5``, ``timeout=10.0``). With a base
            policy, ``None`` values are ignored, so an optional field
            already set on ``policy`` (e.g., ``timeout``) cannot be
            cleared here; use ``dataclasses.replace(policy, timeout=None)``
            instead. Without a base policy, ``None`` values are applied.

    Returns:
        The result of the first successful attempt, or of the fallback.

    Raises:
        NonRetryableError: If ``should_retry`` rejected a failure.
        RetriesExhaustedError: If every attempt failed and no fallback is
            configured.
        TimeoutExceededError: If the policy timeout elapsed first.
        TypeError: If operation is not callable or an override does not
            name a policy field.
        ValueError: If a policy parameter is invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryit import RetryPolicy, retry
        >>> calls = []
        >>> async def flaky() -> str:
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("Transient error")
        ...     return "Success"
        ...
        >>> asyncio.run(retry(flaky, RetryPolicy(max_retries=3, base_delay=0.01)))
        'Success'
        >>> len(calls)
        3

        ```
    """
    if not callable(operation):
        msg = f"operation must be callable, got {type(operation).__name__}"
        raise TypeError(msg)
    executor = AsyncRetryExecutor(_build_policy(policy, overrides))
    return await executor.execute(operation)


def retryable(
    policy: RetryPolicy | None = None,
    **overrides: Any,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorate a coroutine function so every call is retried.

    The policy is built once at decoration time, so invalid parameters
    fail at import rather than at the first call. Each call binds its
    arguments into a fresh zero-argument operation, and runs are
    independent of each other.

    Args:
        policy: Optional retry policy. Defaults to ``RetryPolicy()``.
        **overrides: Policy fields overriding those of ``policy``, with
            the same ``None`` handling as in ``retry``.

    Returns:
        The decorator.

    Raises:
        TypeError: If the decorated object is not a coroutine function.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryit import retryable
        >>> @retryable(max_retries=2, base_delay=0.01)
        ... async def get_user(user_id: int) -> dict:
        ...     return {"id": user_id}
        ...
        >>> asyncio.run(get_user(42))
        {'id': 42}

        ```
    """
    resolved = _build_policy(policy, overrides)

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        if not inspect.iscoroutinefunction(func):
            msg = f"retryable can only decorate coroutine functions, got {func!r}"
            raise TypeError(msg)

        executor = AsyncRetryExecutor(resolved)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await executor.execute(lambda: func(*args, **kwargs))

        wrapper.retry_policy = resolved  # type: ignore[attr-defined]
        return wrapper

    return decorator
