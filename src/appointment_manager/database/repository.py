"""Entity repository — data access layer for every managed table."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import fields, replace
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from appointment_manager.config import settings
from appointment_manager.errors import (
    DataAccessError,
    EmptyTableError,
    IntegrityViolationError,
)
from appointment_manager.models.entities import ENTITY_TYPES, AuditInfo, EntityKind, kind_of
from appointment_manager.models.tables import (
    AppointmentRow,
    Base,
    ContactRow,
    CustomerRow,
    UserRow,
)

logger = logging.getLogger(__name__)

TABLES: dict[EntityKind, type[Base]] = {
    EntityKind.CUSTOMER: CustomerRow,
    EntityKind.APPOINTMENT: AppointmentRow,
    EntityKind.CONTACT: ContactRow,
    EntityKind.USER: UserRow,
}


def utc_now() -> datetime:
    """Naive UTC wall-clock time, as stored in the audit columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def _field_names(kind: EntityKind) -> list[str]:
    return [f.name for f in fields(ENTITY_TYPES[kind]) if f.name != "audit"]


class Repository:
    """Encapsulates all store queries for customers, appointments, contacts and users.

    Entities go in and come out as detached dataclass snapshots.  Every
    mutating call commits its own transaction; any SQLAlchemy failure is
    rolled back and re-raised as :class:`DataAccessError`,
    or :class:`IntegrityViolationError` when a constraint rejected a write.

    ``next_id`` followed by ``insert`` is a read-then-write with no
    isolation: another process inserting in between gets the same id.
    Use :meth:`insert_new` when the caller can take the id from the result.
    """

    def __init__(
        self,
        session: AsyncSession,
        actor: str | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session = session
        self._actor = actor or settings.actor_tag
        self._clock = clock

    # ── Reads ────────────────────────────────────────────

    async def list_all(self, kind: EntityKind) -> list[Any]:
        """Fetch every row of *kind*'s table, in store-defined order."""
        row_type = TABLES[kind]
        stmt = select(row_type).execution_options(populate_existing=True)
        result = await self._execute(stmt)
        return [self._to_entity(kind, row) for row in result.scalars()]

    async def get(self, kind: EntityKind, entity_id: int) -> Any | None:
        """Look up a single entity by id; ``None`` if no such row."""
        row_type = TABLES[kind]
        stmt = (
            select(row_type)
            .where(row_type.id == entity_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        row = result.scalar_one_or_none()
        return self._to_entity(kind, row) if row is not None else None

    async def next_id(self, kind: EntityKind) -> int:
        """Return ``max(id) + 1`` for *kind*'s table.

        Raises :class:`EmptyTableError` when the table has no rows.
        """
        row_type = TABLES[kind]
        result = await self._execute(select(func.max(row_type.id)))
        max_id = result.scalar_one()
        if max_id is None:
            raise EmptyTableError(row_type.__tablename__)
        return max_id + 1

    # ── Writes ───────────────────────────────────────────

    async def insert(self, entity: Any) -> None:
        """Write *entity* as a new row using its pre-assigned id."""
        kind = kind_of(entity)
        row_type = TABLES[kind]
        values = self._insert_values(kind, entity, self._clock())
        await self._execute(insert(row_type).values(**values), commit=True)
        logger.info("Inserted %s id=%s", kind.value, entity.id)

    async def insert_new(self, entity: Any) -> Any:
        """Allocate the next id and insert *entity* in one transaction.

        The id on *entity* is ignored.  Starts at 1 on an empty table.  If
        a concurrent writer claims the allocated id first, the allocation
        is retried up to ``settings.id_allocation_attempts`` times.
        Returns the stored entity carrying its new id.
        """
        kind = kind_of(entity)
        row_type = TABLES[kind]
        attempts = settings.id_allocation_attempts

        for attempt in range(1, attempts + 1):
            now = self._clock()
            try:
                result = await self._session.execute(
                    select(func.coalesce(func.max(row_type.id), 0))
                )
                stored = replace(entity, id=result.scalar_one() + 1)
                await self._session.execute(
                    insert(row_type).values(**self._insert_values(kind, stored, now))
                )
                await self._session.commit()
            except IntegrityError as exc:
                await self._session.rollback()
                if await self.get(kind, stored.id) is None:
                    raise IntegrityViolationError(str(exc.orig)) from exc
                logger.warning(
                    "%s id %s taken concurrently, retrying (%d/%d)",
                    kind.value,
                    stored.id,
                    attempt,
                    attempts,
                )
                continue
            except SQLAlchemyError as exc:
                await self._session.rollback()
                logger.error("Insert into %s failed: %s", row_type.__tablename__, exc)
                raise DataAccessError(str(exc)) from exc

            logger.info("Inserted %s id=%s", kind.value, stored.id)
            return replace(
                stored, audit=AuditInfo(now, self._actor, now, self._actor)
            )

        raise DataAccessError(
            f"Could not allocate an id in {row_type.__tablename__!r} "
            f"after {attempts} attempts"
        )

    async def update(self, entity: Any) -> None:
        """Overwrite the mutable fields of the row with *entity*'s id.

        Stamps last-update time and actor.  A missing row is not an error.
        """
        kind = kind_of(entity)
        row_type = TABLES[kind]
        values = {
            name: getattr(entity, name) for name in _field_names(kind) if name != "id"
        }
        values.update(last_update=self._clock(), last_updated_by=self._actor)
        stmt = (
            update(row_type)
            .where(row_type.id == entity.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt, commit=True)
        if result.rowcount == 0:
            logger.debug("Update of %s id=%s matched no rows", kind.value, entity.id)

    async def delete(self, kind: EntityKind, entity_id: int) -> None:
        """Remove the row with *entity_id*.  A missing row is not an error."""
        row_type = TABLES[kind]
        stmt = (
            delete(row_type)
            .where(row_type.id == entity_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt, commit=True)
        if result.rowcount == 0:
            logger.debug("Delete of %s id=%s matched no rows", kind.value, entity_id)
        else:
            logger.info("Deleted %s id=%s", kind.value, entity_id)

    # ── Private helpers ──────────────────────────────────

    async def _execute(self, stmt, *, commit: bool = False):
        try:
            result = await self._session.execute(stmt)
            if commit:
                await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.warning("Store rejected write: %s", exc.orig)
            raise IntegrityViolationError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Store operation failed: %s", exc)
            raise DataAccessError(str(exc)) from exc
        return result

    def _insert_values(self, kind: EntityKind, entity: Any, now: datetime) -> dict:
        values = {name: getattr(entity, name) for name in _field_names(kind)}
        values.update(
            create_date=now,
            created_by=self._actor,
            last_update=now,
            last_updated_by=self._actor,
        )
        return values

    @staticmethod
    def _to_entity(kind: EntityKind, row: Base) -> Any:
        values = {name: getattr(row, name) for name in _field_names(kind)}
        audit = AuditInfo(
            create_date=row.create_date,
            created_by=row.created_by,
            last_update=row.last_update,
            last_updated_by=row.last_updated_by,
        )
        return ENTITY_TYPES[kind](**values, audit=audit)
