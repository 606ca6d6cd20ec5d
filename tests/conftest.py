"""Shared fixtures: in-memory SQLite engine, frozen clock, HTTP client."""

import os

# must be set before customer_management.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from customer_management.core.deps import get_tier_calculator
from customer_management.db.base import get_db, init_models
from customer_management.main import app
from customer_management.services.customer_service import CustomerService
from customer_management.services.customer_store import SqlAlchemyCustomerStore
from customer_management.services.tier import MembershipTierCalculator

NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def calculator() -> MembershipTierCalculator:
    return MembershipTierCalculator(clock=lambda: NOW)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def service(session, calculator) -> CustomerService:
    return CustomerService(SqlAlchemyCustomerStore(session), calculator)


@pytest_asyncio.fixture
async def client(session_factory, calculator):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tier_calculator] = lambda: calculator
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
