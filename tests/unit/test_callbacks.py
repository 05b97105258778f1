r"""Unit tests for on_retry hook invocation."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, Mock

import pytest

from retryit.callbacks import invoke_on_retry


@pytest.mark.asyncio
async def test_invoke_on_retry_none() -> None:
    await invoke_on_retry(None, attempt=1, error=RuntimeError("boom"))


@pytest.mark.asyncio
async def test_invoke_on_retry_sync_hook(mock_callback: Mock) -> None:
    error = RuntimeError("boom")
    await invoke_on_retry(mock_callback, attempt=2, error=error)
    mock_callback.assert_called_once_with(2, error)


@pytest.mark.asyncio
async def test_invoke_on_retry_async_hook_is_awaited() -> None:
    error = RuntimeError("boom")
    hook = AsyncMock(return_value=None)
    await invoke_on_retry(hook, attempt=1, error=error)
    hook.assert_awaited_once_with(1, error)


@pytest.mark.asyncio
async def test_invoke_on_retry_sync_hook_failure_is_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    hook = Mock(side_effect=ValueError("hook bug"))
    with caplog.at_level(logging.ERROR, logger="retryit.callbacks"):
        await invoke_on_retry(hook, attempt=3, error=RuntimeError("boom"))

    assert "on_retry hook failed on retry 3, ignoring" in caplog.text
    assert "hook bug" in caplog.text


@pytest.mark.asyncio
async def test_invoke_on_retry_async_hook_failure_is_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    hook = AsyncMock(side_effect=ValueError("async hook bug"))
    with caplog.at_level(logging.ERROR, logger="retryit.callbacks"):
        await invoke_on_retry(hook, attempt=1, error=RuntimeError("boom"))

    assert "async hook bug" in caplog.text
