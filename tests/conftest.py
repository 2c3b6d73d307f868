"""
Pytest fixtures for the app directory tests
"""

import asyncio
import os
from collections.abc import Iterator

os.environ.setdefault("DIRECTORY_ENV", "test")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.container import ApplicationContainer, get_wire_container  # noqa: E402
from app.create_app import create_app  # noqa: E402
from app.database import DatabaseManager  # noqa: E402


async def _create_schema(database_url: str) -> None:
    manager = DatabaseManager()
    manager.init_db(database_url)
    try:
        await manager.create_tables()
    finally:
        await manager.close()


@pytest.fixture
def database_url(tmp_path) -> str:
    """A fresh SQLite database file with the full schema."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}"
    asyncio.run(_create_schema(url))
    return url


@pytest.fixture
def container() -> Iterator[ApplicationContainer]:
    application_container = get_wire_container()
    yield application_container
    application_container.unwire()


@pytest.fixture
def api(database_url: str, container: ApplicationContainer) -> Iterator[TestClient]:
    """Test client for the API backed by a fresh database."""
    with TestClient(create_app(database_url=database_url)) as client:
        yield client


@pytest.fixture
def new_app() -> dict[str, str]:
    return {
        "name": "Foo",
        "description": "A tool for foo-ing",
        "url": "https://foo.example",
        "category": "Tools",
    }


@pytest.fixture
def submit(api: TestClient, new_app: dict[str, str]):
    """Submit an app through the API and return its JSON representation."""

    def _submit(**overrides: object) -> dict:
        response = api.post("/api/apps", json={**new_app, **overrides})
        assert response.status_code == 201, response.text
        return response.json()

    return _submit


@pytest.fixture
def approved(api: TestClient, submit):
    """Submit and approve an app."""

    def _approved(**overrides: object) -> dict:
        app = submit(**overrides)
        response = api.patch(f"/api/apps/{app['id']}/approve", json={"approved": True})
        assert response.status_code == 200, response.text
        return response.json()

    return _approved
