"""
Pytest fixtures shared by the service and API tests.
"""
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from kopi_cafe.db.base import Base
from kopi_cafe.models import Role, User

from fakes import Stores


@pytest.fixture
def stores():
    """Empty in-memory stores; tests seed what they need."""
    return Stores()


@pytest.fixture
def service(stores):
    return stores.service()


@pytest.fixture
async def session_factory():
    """Sessions on a fresh in-memory SQLite schema, dropped after the test."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def customer():
    return User(id=1, username="ani", full_name="Ani Wijaya", role=Role(id=1, name="CUSTOMER"))


@pytest.fixture
def other_customer():
    return User(id=2, username="budi", full_name="Budi Santoso", role=Role(id=1, name="CUSTOMER"))


@pytest.fixture
def staff_user():
    return User(id=9, username="barista", full_name="Citra", role=Role(id=2, name="staff"))
