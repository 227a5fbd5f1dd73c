"""API fixtures: app with a live service container."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import set_service_container
from api.main import create_app


@pytest.fixture
def client(container):
    set_service_container(container)
    with TestClient(create_app()) as test_client:
        yield test_client
    set_service_container(None)


@pytest.fixture
def bare_client():
    """Client without a service container (engine still starting)."""
    set_service_container(None)
    with TestClient(create_app(), raise_server_exceptions=False) as test_client:
        yield test_client
