"""Shared fixtures: an app over in-memory storage and an async client."""
from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from qtrack.config import QTrackConfig
from qtrack_api.app import create_app
from qtrack_api.deps import Container

TOKEN = "test-token"


@pytest.fixture
def container() -> Container:
    config = QTrackConfig(_env_file=None, storage_backend="memory", admin_token=TOKEN, gates_file="")
    return Container.build(config)


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
async def client(app):
    """Async HTTP client wired to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth() -> dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN}"}
