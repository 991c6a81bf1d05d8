import os
import sys

# Ensure the medlink package is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Settings() is built at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-min-32-chars-long-for-security")
os.environ.setdefault("STORAGE_PUBLIC_BASE_URL", "http://minio.test:9000")

import httpx
import pytest
import pytest_asyncio

from medlink.main import app
from medlink.core.config import settings
from medlink.core.database import create_engine_and_sessionmaker, create_tables
from medlink.core.storage import ObjectStorage


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """A fresh SQLite database file per test."""
    engine, factory = create_engine_and_sessionmaker(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables(engine)
    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    # ASGITransport does not run the lifespan handler, so wire app.state by hand
    app.state.session_factory = session_factory
    app.state.storage = ObjectStorage.from_settings(settings)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register_user(client, email: str, **overrides) -> dict:
    """Register a user through the API and return the {token, user} body."""
    payload = {
        "email": email,
        "password": "secret123",
        "firstName": "Test",
        "lastName": "User",
        "professionType": "Doctor",
        "specialty": "Cardiology",
        "yearsOfExperience": 5,
    }
    payload.update(overrides)
    response = await client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def connect_users(client, requester: dict, receiver: dict) -> int:
    """requester sends a request, receiver accepts; returns the connection id."""
    response = await client.post(
        "/connections/requests",
        json={"receiverId": receiver["user"]["id"]},
        headers=auth_header(requester["token"]),
    )
    assert response.status_code == 201, response.text
    connection_id = response.json()["connection"]["id"]
    response = await client.post(
        f"/connections/requests/{connection_id}/respond",
        json={"response": "accepted"},
        headers=auth_header(receiver["token"]),
    )
    assert response.status_code == 200, response.text
    return connection_id
