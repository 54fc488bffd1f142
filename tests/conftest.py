from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

from retryclient.utils.debug_logging import LoggingDebugLogger
from tests.helpers import BASE_URL

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_debug_logger() -> Mock:
    """Create a mock logging collaborator for testing debug output."""
    return Mock(spec=LoggingDebugLogger)


@pytest.fixture
def get_request() -> httpx.Request:
    """Create an outgoing GET request for testing."""
    return httpx.Request("GET", f"{BASE_URL}/users")


@pytest.fixture
def post_request() -> httpx.Request:
    """Create an outgoing POST request for testing."""
    return httpx.Request("POST", f"{BASE_URL}/users")
