"""
Global test fixtures for the Secret Santa backend.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Mock Redis (fakeredis)
- Name pool and registrant factories
- ASGI test clients
"""

import os
import random
import sys
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

# Settings are cached on first use, so these must be set before any import
# of the application package.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("MONGO_TRANSACTIONS", "false")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    mongomock has no sessions, so services built on it run with
    transactions disabled.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_santa_db(mock_async_mongo_client):
    """Provide mock santa_db with the same indexes as the real app."""
    from secret_santa.database.databases import santa_db

    db = mock_async_mongo_client[santa_db.DB_NAME]
    await santa_db.create_santa_indexes(db)
    yield db


# =============================================================================
# Redis Fixtures (fakeredis)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_redis():
    """
    Create an async mock Redis client using fakeredis.
    """
    try:
        import fakeredis
        redis_client = fakeredis.FakeAsyncRedis(decode_responses=True)
        yield redis_client
        await redis_client.flushall()
        await redis_client.aclose()
    except ImportError:
        pytest.skip("fakeredis not installed")


# =============================================================================
# Name Pool Fixtures
# =============================================================================

def _make_person(name: str, **overrides) -> dict:
    """Build a pool candidate document."""
    slug = name.lower().replace(" ", ".")
    person = {
        "name": name,
        "email": f"{slug}@example.com",
        "drive_link": f"https://drive.example.com/{slug}",
        "description": f"{name} likes board games",
    }
    person.update(overrides)
    return person


@pytest.fixture
def make_person():
    """Factory for pool candidate documents."""
    return _make_person


@pytest.fixture
def pool_people() -> list[dict]:
    """Three candidates with distinct names."""
    return [_make_person("Alice"), _make_person("Bob"), _make_person("Carol")]


@pytest.fixture
def seed_names(mock_santa_db):
    """
    Helper to write the singleton pool document.

    Usage:
        async def test_x(seed_names):
            await seed_names([make_person("Bob")])
    """
    from secret_santa.database.databases import santa_db

    async def _seed(people: list[dict]):
        await mock_santa_db[santa_db.Collections.NAME_POOL].replace_one(
            {"_id": santa_db.POOL_ID},
            {"_id": santa_db.POOL_ID, "unassigned": people},
            upsert=True,
        )
    return _seed


@pytest.fixture
def pool_names(mock_santa_db):
    """Helper returning the names currently left in the pool."""
    from secret_santa.database.databases import santa_db

    async def _names() -> list[str]:
        doc = await mock_santa_db[santa_db.Collections.NAME_POOL].find_one({"_id": santa_db.POOL_ID})
        return [p["name"] for p in doc["unassigned"]] if doc else []
    return _names


@pytest.fixture
def registrant() -> dict:
    """Basic registrant data for create_assignment."""
    return {
        "name": "Dave",
        "email": "Dave@Example.com",
        "password": "mistletoe",
    }


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def assignment_service(mock_santa_db):
    """AssignmentService on the mock database with a seeded RNG."""
    from secret_santa.services.assignment_service import AssignmentService

    return AssignmentService(mock_santa_db, rng=random.Random(1234), use_transactions=False)


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app():
    """
    Create FastAPI app for testing.

    Note: This imports the actual app and should be used with mocked
    database connections.
    """
    from secret_santa.main import app
    return app


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Startup index creation is pointed at an in-memory MongoDB so the
    lifespan never waits on a real server.
    """
    from unittest.mock import patch
    from mongomock_motor import AsyncMongoMockClient

    mock_client = AsyncMongoMockClient()

    async def _get_mongo():
        return mock_client

    with patch("secret_santa.main.get_mongo_client", side_effect=_get_mongo):
        with TestClient(app) as c:
            yield c


@pytest_asyncio.fixture
async def async_client(app, assignment_service, mock_async_redis):
    """
    Async client with the assignment service and Redis replaced by mocks.

    ASGITransport does not run the lifespan, so no real connection is made.
    """
    from unittest.mock import patch
    from httpx import AsyncClient, ASGITransport
    from secret_santa.dependencies.santa import get_assignment_service

    async def _get_redis():
        return mock_async_redis

    app.dependency_overrides[get_assignment_service] = lambda: assignment_service
    with patch("secret_santa.core.rate_limit.get_redis_client", side_effect=_get_redis):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test"
        ) as ac:
            yield ac
    app.dependency_overrides.clear()
