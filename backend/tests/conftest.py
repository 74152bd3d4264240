"""
conftest.py — Shared pytest fixtures for the Move Planner backend test suite.

Three layers of fixtures:
  - ``fake_store``: in-memory MoveStore stand-in for pure manager unit tests.
  - ``db_engine`` / ``db_session`` / ``store``: a throwaway SQLite file per
    test (aiosqlite), schema created and catalogs seeded through init_db().
  - ``client``: FastAPI TestClient over create_app() with get_db overridden
    to the same kind of throwaway database.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``moveplanner.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import sys
import os
import pytest
import pytest_asyncio

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any moveplanner imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

# Module-level engine in moveplanner.db must never point at a developer database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-move-planner-suite")

TEST_PASSWORD = "correct-horse-battery"


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_store():
    from fakes import FakeStore
    return FakeStore()


# ---------------------------------------------------------------------------
# Real database (SQLite file per test)
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def db_engine(tmp_path):
    """Fresh SQLite database with foreign keys on, tables created and catalogs seeded."""
    from moveplanner.db import build_engine, init_db
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'moves.db'}")
    await init_db(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(db_engine):
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def store(db_session):
    from moveplanner.db.store import MoveStore
    return MoveStore(db_session)


@pytest_asyncio.fixture()
async def users(db_session):
    """Two persisted users, ``alice`` owns data and ``bob`` tries to reach it."""
    from moveplanner.models.orm_models import User
    alice = User(email="alice@example.com", password_hash="x", name="Alice")
    bob = User(email="bob@example.com", password_hash="x", name="Bob")
    db_session.add_all([alice, bob])
    await db_session.commit()
    return {"alice": alice, "bob": bob}


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest.fixture
def client(tmp_path):
    """
    TestClient bound to its own SQLite file.

    The engine is created here but only connected inside the client's event
    loop (lifespan + requests), so no connection crosses loops.
    """
    from fastapi.testclient import TestClient
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from moveplanner.db import build_engine, get_db
    from moveplanner.main import create_app

    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app(engine)
    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as test_client:
        yield test_client


def register_user(client, email: str, name: str = "Test User") -> dict:
    """Register through the API and return the Authorization header for that user."""
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": TEST_PASSWORD, "name": name},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def alice_headers(client):
    return register_user(client, "alice@example.com", "Alice")


@pytest.fixture
def bob_headers(client):
    return register_user(client, "bob@example.com", "Bob")


@pytest.fixture
def move_payload():
    return {
        "customer_name": "Alice Example",
        "customer_email": "Alice@Example.com",
        "customer_phone": "+49 30 1234567",
        "from_address": "Hauptstraße 1, 10115 Berlin",
        "to_address": "Marktplatz 5, 80331 München",
        "move_date": "2026-11-15",
        "move_time": "08:00",
    }
