import os

# Must be set before app.core.database creates the module-level engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.models  # noqa: F401
from app.core.database import Base, get_db
from app.models import Environment, Team, User


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine for tests."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Async session bound to the in-memory engine."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session):
    """Two environments, one team and one user. Returns their ids."""
    uat = Environment(name="UAT Environment", description="User Acceptance Testing")
    dev = Environment(name="Dev Environment", description="Development")
    team = Team(name="Quality Assurance", abbreviation="QA")
    user = User(username="tester")
    db_session.add_all([uat, dev, team, user])
    await db_session.commit()

    return {
        "environment_id": uat.id,
        "other_environment_id": dev.id,
        "team_id": team.id,
        "user_id": user.id,
    }


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client against the app, with get_db bound to the test database."""
    from app.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    app.dependency_overrides.clear()
