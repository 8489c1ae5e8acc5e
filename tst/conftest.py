import os

# Tests build their own stores; never pick up a developer's database.
# An existing (even empty) variable is never overridden by load_dotenv(), so a
# local .env cannot select the SQL store when marketing_service.app is imported.
os.environ["DATABASE_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from marketing_service.app import create_app
from marketing_service.shared.storage.database import SqlSubmissionStore
from marketing_service.shared.storage.memory import MemorySubmissionStore


@pytest.fixture(autouse=True)
def no_database_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "")


@pytest.fixture
def memory_store():
    return MemorySubmissionStore()


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(sqlite_engine):
    store = SqlSubmissionStore(sqlite_engine)
    store.initialize()
    return store


@pytest.fixture(params=["memory", "sql"])
def store(request, memory_store, sqlite_engine):
    """Runs a test once per backend; both must honour the same contract."""
    if request.param == "memory":
        return memory_store
    sql = SqlSubmissionStore(sqlite_engine)
    sql.initialize()
    return sql


@pytest.fixture
def client(memory_store):
    app = create_app(memory_store)
    with TestClient(app) as test_client:
        yield test_client
