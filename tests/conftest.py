import pytest

from tests.mocks.clients import MockService


@pytest.fixture
def service() -> MockService:
    """Create a fresh MockService for each test."""
    return MockService()
