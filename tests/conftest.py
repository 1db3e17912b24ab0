"""Root conftest.py for the CosmiBit test suite."""

from collections.abc import Generator

import pytest

from src.core.config import get_settings
from src.core.context import RequestContext
from src.core.error_context import _sensitive_name_pattern
from src.core.logging import _state
from tests.fixtures.document_store import InMemoryDatabase


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Give every test fresh settings and sensitive field patterns."""
    get_settings.cache_clear()
    _sensitive_name_pattern.cache_clear()
    yield
    get_settings.cache_clear()
    _sensitive_name_pattern.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Prevent correlation IDs from leaking between tests."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[None]:
    """Keep setup_logging from replacing the sinks pytest captures."""
    previous = _state.configured
    _state.configured = True
    yield
    _state.configured = previous


@pytest.fixture
def database() -> InMemoryDatabase:
    """Empty in-memory database."""
    return InMemoryDatabase()
