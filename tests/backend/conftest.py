"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for asserting on the
API's structured error bodies and for driving the transaction runner
without a replica set.
"""

import asyncio
import inspect
import sys
from pathlib import Path

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Transaction Fixtures
# =============================================================================

class FakeSession:
    """
    Stand-in for AsyncIOMotorClientSession.

    with_transaction runs the callback once and records the options it
    was given, which is what the service relies on.
    """

    def __init__(self):
        self.transaction_kwargs = None
        self.ended = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.ended = True
        return False

    async def with_transaction(self, callback, **kwargs):
        self.transaction_kwargs = kwargs
        return await callback(self)


@pytest.fixture
def fake_session():
    """A FakeSession to hand out from a mocked start_session."""
    return FakeSession()


class YieldingCollection:
    """
    Wraps a mongomock-motor collection so every call yields to the event loop.

    mongomock-motor completes each operation without suspending, so
    asyncio.gather would otherwise run concurrent draws one after another.
    """

    def __init__(self, collection):
        self._collection = collection

    def __getattr__(self, name):
        attr = getattr(self._collection, name)
        if not callable(attr):
            return attr

        async def call(*args, **kwargs):
            await asyncio.sleep(0)
            result = attr(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            await asyncio.sleep(0)
            return result
        return call


@pytest.fixture
def interleave_store():
    """Make a service's collections yield between every store call."""
    def _interleave(service):
        service.assignments = YieldingCollection(service.assignments)
        service.pool = YieldingCollection(service.pool)
        return service
    return _interleave


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, kind: str, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert data["error"] == kind
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in data["detail"].lower()
    return _assert


@pytest.fixture
def assert_assignment_response():
    """Helper to assert a successful assignment body."""
    def _assert(response, expected: dict = None):
        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"name", "description", "driveLink"}
        if expected:
            assert data["name"] == expected["name"]
            assert data["description"] == expected["description"]
            assert data["driveLink"] == expected["drive_link"]
    return _assert
