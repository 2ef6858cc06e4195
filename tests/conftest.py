from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[AsyncMock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", new_callable=AsyncMock, return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing hooks.

    Returns:
        A Mock object that can be used as a hook.

    Example:
        >>> def test_callback(mock_callback):
        ...     execute_bounded(operation, ValueError, on_retry=mock_callback)
        ...     mock_callback.assert_called_once()
    """
    return Mock()
