"""Fixtures for end-to-end tests against the mocked app."""

import pytest
from fastapi.testclient import TestClient

from together.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def container():
    """Mocked container served by the app."""
    return build_test_container(with_fastapi=True)


@pytest.fixture
def client(container):
    """Test client whose portal shares the app's event loop."""
    with TestClient(create_app(container)) as test_client:
        yield test_client
