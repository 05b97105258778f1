r"""Parameter validation utilities for retry policies.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before a retry run starts.
"""

from __future__ import annotations

__all__ = ["validate_callable", "validate_retry_params", "validate_timeout"]

from typing import Any


def validate_timeout(timeout: float | None) -> None:
    """Validate the overall timeout parameter.

    Args:
        timeout: The wall-clock budget in seconds for a whole retry run.
            Must be > 0 if provided.

    Raises:
        ValueError: If timeout is not ``None`` and is <= 0.

    Example:
        ```pycon
        >>> from retryit.utils.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout is not None and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int,
    base_delay: float,
    max_jitter: float = 0.0,
    timeout: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Number of retry attempts after the initial attempt.
            Must be an integer >= 0. A value of 0 means only the initial
            attempt is made.
        base_delay: Delay in seconds before the first retry. Must be >= 0.
        max_jitter: Upper bound in seconds of the random jitter added to
            exponential delays. Must be >= 0.
        timeout: Optional wall-clock budget in seconds. Must be > 0 if
            provided.

    Raises:
        TypeError: If max_retries is not an integer.
        ValueError: If max_retries, base_delay or max_jitter are negative,
            or if timeout is non-positive.

    Example:
        ```pycon
        >>> from retryit.utils.validation import validate_retry_params
        >>> validate_retry_params(max_retries=3, base_delay=0.1)
        >>> validate_retry_params(max_retries=3, base_delay=0.1, max_jitter=0.05)
        >>> validate_retry_params(max_retries=-1, base_delay=0.1)
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        msg = f"max_retries must be an integer, got {type(max_retries).__name__}"
        raise TypeError(msg)
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if base_delay < 0:
        msg = f"base_delay must be >= 0, got {base_delay}"
        raise ValueError(msg)
    if max_jitter < 0:
        msg = f"max_jitter must be >= 0, got {max_jitter}"
        raise ValueError(msg)
    validate_timeout(timeout)


def validate_callable(name: str, value: Any) -> None:
    """Validate that an optional policy hook is callable.

    Args:
        name: The parameter name, used in the error message.
        value: The value to check. ``None`` is accepted.

    Raises:
        TypeError: If value is neither ``None`` nor callable.

    Example:
        ```pycon
        >>> from retryit.utils.validation import validate_callable
        >>> validate_callable("on_retry", print)
        >>> validate_callable("on_retry", None)

        ```
    """
    if value is not None and not callable(value):
        msg = f"{name} must be callable, got {type(value).__name__}"
        raise TypeError(msg)
