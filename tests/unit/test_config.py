r"""Unit tests for RetryPolicy dataclass.

This file contains tests for the RetryPolicy dataclass in config.py.
"""

from __future__ import annotations

import dataclasses
from unittest.mock import AsyncMock, Mock

import pytest
from coola.equality import objects_are_equal

from retryit import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_JITTER,
    DEFAULT_MAX_RETRIES,
    ConstantBackoff,
    ExponentialBackoff,
    RetryPolicy,
)

#################################
#     Tests for RetryPolicy     #
#################################


def test_retry_policy_defaults() -> None:
    """Test that RetryPolicy uses correct default values."""
    policy = RetryPolicy()

    assert policy.max_retries == DEFAULT_MAX_RETRIES
    assert policy.base_delay == DEFAULT_BASE_DELAY
    assert not policy.exponential_backoff
    assert policy.max_jitter == DEFAULT_MAX_JITTER
    assert policy.on_retry is None
    assert policy.should_retry is None
    assert policy.timeout is None
    assert policy.fallback is None
    assert policy.backoff_strategy is None
    assert policy.cancel_on_timeout


def test_retry_policy_custom_values() -> None:
    on_retry = Mock()
    should_retry = Mock(return_value=True)
    fallback = AsyncMock()
    policy = RetryPolicy(
        max_retries=5,
        base_delay=1.0,
        exponential_backoff=True,
        max_jitter=0.2,
        on_retry=on_retry,
        should_retry=should_retry,
        timeout=10.0,
        fallback=fallback,
        cancel_on_timeout=False,
    )

    assert policy.max_retries == 5
    assert policy.base_delay == 1.0
    assert policy.exponential_backoff
    assert policy.max_jitter == 0.2
    assert policy.on_retry is on_retry
    assert policy.should_retry is should_retry
    assert policy.timeout == 10.0
    assert policy.fallback is fallback
    assert not policy.cancel_on_timeout


def test_retry_policy_is_frozen() -> None:
    policy = RetryPolicy()
    with pytest.raises(dataclasses.FrozenInstanceError):
        policy.max_retries = 10  # type: ignore[misc]


@pytest.mark.parametrize("max_retries", [0, 1, 10])
def test_retry_policy_accepts_valid_max_retries(max_retries: int) -> None:
    assert RetryPolicy(max_retries=max_retries).max_retries == max_retries


def test_retry_policy_rejects_negative_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0, got -1"):
        RetryPolicy(max_retries=-1)


@pytest.mark.parametrize("max_retries", [1.5, "3", True, None])
def test_retry_policy_rejects_non_integer_max_retries(max_retries: object) -> None:
    with pytest.raises(TypeError, match=r"max_retries must be an integer"):
        RetryPolicy(max_retries=max_retries)  # type: ignore[arg-type]


def test_retry_policy_rejects_negative_base_delay() -> None:
    with pytest.raises(ValueError, match=r"base_delay must be >= 0, got -0.5"):
        RetryPolicy(base_delay=-0.5)


def test_retry_policy_accepts_zero_base_delay() -> None:
    assert RetryPolicy(base_delay=0).base_delay == 0


def test_retry_policy_rejects_negative_max_jitter() -> None:
    with pytest.raises(ValueError, match=r"max_jitter must be >= 0, got -1"):
        RetryPolicy(max_jitter=-1)


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_retry_policy_rejects_non_positive_timeout(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        RetryPolicy(timeout=timeout)


@pytest.mark.parametrize("name", ["on_retry", "should_retry", "fallback"])
def test_retry_policy_rejects_non_callable_hooks(name: str) -> None:
    with pytest.raises(TypeError, match=rf"{name} must be callable"):
        RetryPolicy(**{name: "not callable"})


def test_retry_policy_rejects_invalid_backoff_strategy() -> None:
    with pytest.raises(TypeError, match=r"backoff_strategy must be a BaseBackoffStrategy"):
        RetryPolicy(backoff_strategy=2.0)  # type: ignore[arg-type]


################################################
#     Tests for RetryPolicy.create_backoff     #
################################################


def test_retry_policy_create_backoff_constant() -> None:
    assert isinstance(RetryPolicy().create_backoff(), ConstantBackoff)


def test_retry_policy_create_backoff_exponential() -> None:
    backoff = RetryPolicy(exponential_backoff=True, max_jitter=0.05).create_backoff()
    assert isinstance(backoff, ExponentialBackoff)
    assert backoff.max_jitter == 0.05


def test_retry_policy_create_backoff_custom_strategy_takes_precedence() -> None:
    strategy = ExponentialBackoff(multiplier=3.0)
    policy = RetryPolicy(exponential_backoff=False, backoff_strategy=strategy)
    assert policy.create_backoff() is strategy


#######################################
#     Tests for RetryPolicy.merge     #
#######################################


def test_retry_policy_merge_overrides() -> None:
    policy = RetryPolicy(max_retries=3, base_delay=0.5)
    merged = policy.merge(max_retries=5, timeout=2.0)

    assert merged.max_retries == 5
    assert merged.timeout == 2.0
    assert merged.base_delay == 0.5
    assert policy.max_retries == 3
    assert policy.timeout is None


def test_retry_policy_merge_ignores_none() -> None:
    policy = RetryPolicy(max_retries=3, timeout=2.0)
    assert policy.merge(max_retries=None, timeout=None) == policy


def test_retry_policy_merge_validates() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0"):
        RetryPolicy().merge(max_retries=-1)


def test_retry_policy_merge_rejects_unknown_field() -> None:
    with pytest.raises(TypeError):
        RetryPolicy().merge(retries=3)


#########################################
#     Tests for RetryPolicy.to_dict     #
#########################################


def test_retry_policy_to_dict() -> None:
    assert objects_are_equal(
        RetryPolicy(max_retries=5, timeout=1.0).to_dict(),
        {
            "max_retries": 5,
            "base_delay": DEFAULT_BASE_DELAY,
            "exponential_backoff": False,
            "max_jitter": DEFAULT_MAX_JITTER,
            "on_retry": None,
            "should_retry": None,
            "timeout": 1.0,
            "fallback": None,
            "backoff_strategy": None,
            "cancel_on_timeout": True,
        },
    )


def test_retry_policy_round_trip_through_dict() -> None:
    policy = RetryPolicy(max_retries=2, exponential_backoff=True)
    assert RetryPolicy(**policy.to_dict()) == policy
