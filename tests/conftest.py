"""Shared fixtures for the check-in backend tests.

Uses SQLite (aiosqlite) by default.
Set TEST_DATABASE_URL to override (e.g. for CI with real PostgreSQL).
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# Ensure settings can be loaded without .env
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-unit-tests")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from checkin.database import Base  # noqa: E402

TEACHER_USERNAME = "teacher"
TEACHER_PASSWORD = "teacherpass"

# ---------------------------------------------------------------------------
# Engine: SQLite in-memory with StaticPool (shared across connections)
# ---------------------------------------------------------------------------

_engine_kwargs = {}
if TEST_DATABASE_URL.startswith("sqlite"):
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }

_engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs)
_TestSession = async_sessionmaker(
    bind=_engine, class_=AsyncSession, expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Session-scoped: create / drop tables
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="session", autouse=True)
async def _setup_tables():
    import checkin.models  # noqa: F401  populate Base.metadata

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await _engine.dispose()


# ---------------------------------------------------------------------------
# Reset rate-limiter counters before every test
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Clear in-memory rate-limit counters so tests never block each other."""
    from checkin.core.rate_limit import limiter

    storage = getattr(limiter, "_storage", None)
    if storage is not None and hasattr(storage, "reset"):
        storage.reset()


# ---------------------------------------------------------------------------
# Per-test session with rollback
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def db_session():
    async with _TestSession() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture()
async def seeded(db_session: AsyncSession):
    """Seed rooms 1..3 and the teacher account into the test transaction."""
    from checkin.services.seed_service import seed_rooms, seed_teacher

    await seed_rooms(db_session, ["Seedlings", "Saplings", "Oaks"])
    await seed_teacher(db_session, TEACHER_USERNAME, TEACHER_PASSWORD)
    return db_session


# ---------------------------------------------------------------------------
# HTTP test client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def client(seeded: AsyncSession):
    from checkin.database import get_db
    from checkin.main import app

    async def _override_get_db():
        yield seeded

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def committing_client(monkeypatch):
    """HTTP client whose requests run in real transactions.

    The application's own ``get_db`` is used, bound to the test engine, so
    every request commits on success and rolls back on error. All rows are
    deleted afterwards.
    """
    from checkin import database
    from checkin.main import app
    from checkin.services.seed_service import seed_rooms

    monkeypatch.setattr(database, "async_session", _TestSession)
    async with _TestSession() as session:
        await seed_rooms(session, ["Seedlings", "Saplings", "Oaks"])
        await session.commit()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    async with _TestSession() as session:
        for table in reversed(Base.metadata.sorted_tables):
            await session.execute(table.delete())
        await session.commit()


# ---------------------------------------------------------------------------
# Convenience: logged-in teacher
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def teacher_headers(client: AsyncClient):
    """Log the seeded teacher in and return bearer headers for the session token.

    The session cookie is cleared from the client jar so unauthenticated
    requests in the same test stay unauthenticated.
    """
    from checkin.config import settings

    resp = await client.post("/teacher/login", json={
        "username": TEACHER_USERNAME,
        "password": TEACHER_PASSWORD,
    })
    assert resp.status_code == 200, resp.text
    token = resp.cookies[settings.SESSION_COOKIE_NAME]
    client.cookies.clear()
    return {"Authorization": f"Bearer {token}"}


async def register_family(
    client: AsyncClient,
    caregiver_name: str = "Ann",
    contact: str = "555-1000",
    kid_name: str = "Bo",
    room_id: int = 2,
) -> dict:
    """Register a kid through the API and return ``{"family_code", "kid_id"}``."""
    resp = await client.post("/register", json={
        "caregiver_name": caregiver_name,
        "caregiver_contact": contact,
        "kid_name": kid_name,
        "room_id": room_id,
    })
    assert resp.status_code == 200, resp.text
    family_code = resp.json()["family_code"]

    kids = (await client.get("/kids", params={"contact_number": contact})).json()
    kid_id = next(k["id"] for k in kids if k["name"] == kid_name)
    return {"family_code": family_code, "kid_id": kid_id}
