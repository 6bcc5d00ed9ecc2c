"""
Shared pytest fixtures.

Key patterns:

1. Store Isolation: each test gets fresh stores (SQLite in a temp file)
2. DI Override: app.dependency_overrides injects the test stores
3. Backend Parametrization: store contract tests run against both backends

Fixture Hierarchy:
    temp_db → metric_store / conversation_store → test_app → client
"""
import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Must happen before any config imports
os.environ.setdefault("HEALTH_CHAT_STORAGE_BACKEND", "memory")

from health_chat.core import dependencies as deps
from health_chat.core.exceptions import setup_exception_handlers
from health_chat.models import MeasurementRecord
from health_chat.repositories import (
    Database,
    InMemoryConversationStore,
    InMemoryMetricStore,
    SqliteConversationStore,
    SqliteMetricStore,
)

BASE_TIME = datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_db():
    """
    Create a temporary database for testing.

    Each test gets its own SQLite file, removed afterwards.
    """
    fd, db_path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    db = Database(db_path=db_path)
    yield db

    for suffix in ("", "-wal", "-shm"):
        if os.path.exists(db_path + suffix):
            os.unlink(db_path + suffix)


@pytest.fixture(params=["memory", "sqlite"])
def metric_store(request):
    """A MetricStore for each backend."""
    if request.param == "sqlite":
        return SqliteMetricStore(db=request.getfixturevalue("temp_db"))
    return InMemoryMetricStore()


@pytest.fixture(params=["memory", "sqlite"])
def conversation_store(request):
    """A ConversationStore for each backend."""
    if request.param == "sqlite":
        return SqliteConversationStore(db=request.getfixturevalue("temp_db"))
    return InMemoryConversationStore()


@pytest.fixture
def make_record():
    """
    Build MeasurementRecords without a store.

    `minutes` offsets the timestamp from BASE_TIME so tests can control
    timestamp order independently of list order.
    """
    counter = {"n": 0}

    def _make(metric_type, value, unit="", minutes=None):
        counter["n"] += 1
        offset = counter["n"] if minutes is None else minutes
        return MeasurementRecord(
            id=f"rec-{counter['n']}",
            type=metric_type,
            value=value,
            unit=unit,
            timestamp=BASE_TIME + timedelta(minutes=offset),
        )

    return _make


@pytest.fixture
def test_app():
    """
    Create a FastAPI test app with dependency overrides.

    Uses the real routers with fresh in-memory stores; exception handlers
    are registered the same way as in production.
    """
    from health_chat.api.routers import (
        chat_router,
        health_router,
        insights_router,
        measurements_router,
        meta_router,
    )

    app = FastAPI(title="Health Chat Service Test")
    setup_exception_handlers(app)

    metric_store = InMemoryMetricStore()
    conversation_store = InMemoryConversationStore()
    app.dependency_overrides[deps.get_metric_store] = lambda: metric_store
    app.dependency_overrides[deps.get_conversation_store] = lambda: conversation_store

    app.include_router(health_router)
    app.include_router(measurements_router)
    app.include_router(insights_router)
    app.include_router(meta_router)
    app.include_router(chat_router)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create a test client for the API."""
    return TestClient(test_app)
