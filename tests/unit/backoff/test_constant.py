r"""Unit tests for ConstantBackoff strategy."""

from __future__ import annotations

import pytest

from retryit.backoff import BaseBackoffStrategy, ConstantBackoff


@pytest.mark.parametrize("delay", [0.0, 0.1, 1.0, 30.0])
def test_constant_backoff_keeps_delay(delay: float) -> None:
    assert ConstantBackoff().next_delay(delay) == delay


def test_constant_backoff_is_backoff_strategy() -> None:
    assert isinstance(ConstantBackoff(), BaseBackoffStrategy)


def test_base_backoff_strategy_is_abstract() -> None:
    with pytest.raises(TypeError):
        BaseBackoffStrategy()  # type: ignore[abstract]
