"""Root conftest — async DB + FastAPI test client shared by all test packages.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Every test gets a fresh app (fresh rate limiter counters) from create_app()
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness checks hit the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-only behavior such as VARCHAR length enforcement is not exercised here)
    - raise_app_exceptions=False: the catch-all handler's 500 response is asserted
      instead of the re-raised exception
"""

import os

# Environment must be set before bank_api.main builds its module-level app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient  # noqa: E402

from bank_api.config import Settings  # noqa: E402
from bank_api.db.base import Base  # noqa: E402
from bank_api.infrastructure.database import get_db, DatabaseSessionManager  # noqa: E402
from bank_api.main import create_app  # noqa: E402
from bank_api.models.customer import Customer  # noqa: E402
import bank_api.infrastructure.database as db_module  # noqa: E402

ALLOWED_ORIGIN = "http://localhost:3000"

SAMPLE_CUSTOMER = {
    "firstName": "Matti",
    "lastName": "Meikäläinen",
    "address": "Kauppurienkatu 1, 90100 Oulu",
}


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
def settings():
    """Settings for the app under test. Override in a module to change mode/limits."""
    return Settings(
        environment="test",
        database_url="sqlite+aiosqlite:///:memory:",
        cors_origins=[ALLOWED_ORIGIN],
    )


@pytest.fixture
async def app(settings, test_engine, test_session_factory):
    """Fresh app with DB dependency overridden."""
    application = create_app(settings)

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for the readiness probe, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    yield application

    application.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def seed_customer(test_db):
    """Insert one customer directly into the test DB."""
    customer = Customer(
        first_name="Liisa", last_name="Virtanen", address="Hallituskatu 7, 90100 Oulu",
    )
    test_db.add(customer)
    await test_db.commit()
    await test_db.refresh(customer)
    return customer


@pytest.fixture
def sample_customer():
    return dict(SAMPLE_CUSTOMER)
