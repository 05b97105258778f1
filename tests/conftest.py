from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_operation() -> AsyncMock:
    """Create a mock operation that succeeds on the first attempt."""
    return AsyncMock(return_value="Success")


@pytest.fixture
def failing_operation() -> AsyncMock:
    """Create a mock operation that always fails."""
    return AsyncMock(side_effect=RuntimeError("Persistent error"))


@pytest.fixture
def mock_fallback() -> AsyncMock:
    """Create a mock fallback operation."""
    return AsyncMock(return_value={"data": "Fallback data"})


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock on_retry hook for testing.

    Returns:
        A Mock object that can be used as an on_retry hook.
    """
    return Mock(return_value=None)
