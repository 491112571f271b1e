"""Shared fixtures — a fresh in-memory database per test."""

from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker

from appointment_manager.database.engine import build_engine, init_db
from appointment_manager.database.repository import Repository
from appointment_manager.models.entities import Contact, Customer, User
from appointment_manager.models.tables import DivisionRow


class FakeClock:
    """Deterministic clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 8, 0, 0))


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with the schema created."""
    test_engine = build_engine("sqlite+aiosqlite://")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Session over a database holding the reference divisions."""
    async with session_factory() as session:
        session.add_all([DivisionRow(id=1, name="Alabama"), DivisionRow(id=101, name="England")])
        await session.commit()
        yield session


@pytest_asyncio.fixture
async def repo(db_session, clock) -> Repository:
    return Repository(db_session, actor="tester", clock=clock)


@pytest_asyncio.fixture
async def seeded_repo(repo: Repository) -> Repository:
    """Repository over a store with two customers, two contacts and one user."""
    for entity in [
        Customer(1, "Acme Ltd", "1 Main St", "12345", "555-0100", 1),
        Customer(2, "Globex", "9 High St", "AB1 2CD", "555-0199", 101),
        Contact(1, "Anika Costa"),
        Contact(2, "Li Lee"),
        User(1, "admin", "pass"),
    ]:
        await repo.insert(entity)
    return repo
