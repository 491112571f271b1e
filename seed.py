"""Seed script — populates the database with sample data for testing."""

import asyncio
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from appointment_manager.database.engine import async_session_factory, init_db
from appointment_manager.database.repository import Repository
from appointment_manager.models.entities import Appointment, Contact, Customer, User
from appointment_manager.models.tables import DivisionRow

SAMPLE_DIVISIONS = [
    DivisionRow(id=1, name="Alabama"),
    DivisionRow(id=2, name="Arizona"),
    DivisionRow(id=60, name="Northwest Territories"),
    DivisionRow(id=101, name="England"),
]

SAMPLE_CONTACTS = [
    Contact(id=1, name="Anika Costa"),
    Contact(id=2, name="Daniel Garcia"),
    Contact(id=3, name="Li Lee"),
]

SAMPLE_USERS = [
    User(id=1, name="test", password="test"),
    User(id=2, name="admin", password="admin"),
]

SAMPLE_CUSTOMERS = [
    Customer(1, "Daddy Warbucks", "1919 Boardwalk", "01291", "869-908-1875", 1),
    Customer(2, "Lady McAnderson", "2 Wonder Way", "AF19B", "11-445-910-2135", 101),
    Customer(3, "Dudley Do-Right", "48 Horse Manor", "28198", "874-916-2671", 60),
]

SAMPLE_APPOINTMENTS = [
    Appointment(
        1, "Kickoff", "Project kickoff", "Planning Session",
        datetime(2024, 5, 6, 9, 0), datetime(2024, 5, 6, 10, 0), 1, 1, 3,
    ),
    Appointment(
        2, "Debrief", "Quarterly debrief", "De-Briefing",
        datetime(2024, 5, 13, 14, 0), datetime(2024, 5, 13, 15, 0), 2, 2, 2,
    ),
    Appointment(
        3, "Follow-up", "Planning follow-up", "Planning Session",
        datetime(2024, 6, 3, 11, 0), datetime(2024, 6, 3, 11, 30), 1, 1, 1,
    ),
]


async def seed() -> None:
    """Insert sample rows into the database."""
    await init_db()
    async with async_session_factory() as session:
        session: AsyncSession
        session.add_all(SAMPLE_DIVISIONS)
        await session.commit()

        repo = Repository(session, actor="script")
        for entity in [
            *SAMPLE_CONTACTS,
            *SAMPLE_USERS,
            *SAMPLE_CUSTOMERS,
            *SAMPLE_APPOINTMENTS,
        ]:
            await repo.insert(entity)

    print(
        f"✅ Seeded {len(SAMPLE_CUSTOMERS)} customers and "
        f"{len(SAMPLE_APPOINTMENTS)} appointments into the database."
    )


if __name__ == "__main__":
    asyncio.run(seed())
