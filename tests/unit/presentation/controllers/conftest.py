from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from src.main.app import create_app
from src.main.container import get_container


@pytest.fixture()
def app(monkeypatch):
    monkeypatch.setenv("CACHE_AUTOSTART", "false")
    return create_app()


@pytest.fixture()
def container(app):
    container = get_container()
    yield container
    container.reset_override()


@pytest.fixture()
def install(container):
    """Refresh a service once against the fake broker and serve it."""

    def _install(provider_name: str, service):
        service.refresh_now()
        getattr(container, provider_name).override(providers.Object(service))
        return service

    return _install


@pytest.fixture()
def client(app, container):
    with TestClient(app) as test_client:
        yield test_client
