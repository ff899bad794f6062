"""Service test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness check sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features are not exercised here)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from founder_discovery.db.base import Base
from founder_discovery.infrastructure.database import get_db, DatabaseSessionManager
import founder_discovery.infrastructure.database as db_module
import founder_discovery.models  # noqa: F401
from founder_discovery.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def project(client):
    """A project whose beachhead is 'first-time founders'."""
    res = await client.post("/api/v1/projects", json={
        "name": "Interview scheduler",
        "beachhead_segment_name": "first-time founders",
    })
    assert res.status_code == 201
    return res.json()


@pytest.fixture
def create_assumption(client, project):
    """Factory: POST an assumption into the fixture project, return its JSON."""
    async def _create(**fields):
        body = {
            "type": "problem",
            "description": "Founders struggle to book customer interviews",
            "canvas_area": "problem",
            "confidence": 3,
            "importance": 4,
        }
        body.update(fields)
        res = await client.post(
            f"/api/v1/projects/{project['id']}/assumptions", json=body,
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _create


@pytest.fixture
def create_interview(client, project):
    """Factory: POST an interview tagging the given assumption ids."""
    async def _create(*assumption_ids, effect="supports", change=0,
                      segment="first-time founders", day=1, **fields):
        body = {
            "segment_name": segment,
            "interview_date": f"2026-03-{day:02d}",
            "assumption_tags": [
                {"assumption_id": aid, "validation_effect": effect,
                 "confidence_change": change}
                for aid in assumption_ids
            ],
        }
        body.update(fields)
        res = await client.post(
            f"/api/v1/projects/{project['id']}/interviews", json=body,
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _create
