"""Report service — fetches appointment data and feeds the reporting engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from appointment_manager.database.repository import Repository
from appointment_manager.models.entities import Appointment, EntityKind
from appointment_manager.reports.engine import (
    ReportRow,
    appointments_for_contact,
    count_by_customer,
    count_by_month,
    count_by_type,
)

logger = logging.getLogger(__name__)


@dataclass
class AppointmentReport:
    """The three grouped counts, computed from a single appointment fetch."""

    total: int
    by_type: list[ReportRow]
    by_month: list[ReportRow]
    by_customer: list[ReportRow]


class ReportService:
    """Loads snapshots through the repository and builds reports from them.

    Store failures propagate as ``DataAccessError``; the aggregation itself
    never fails.
    """

    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    async def summary(self) -> AppointmentReport:
        appointments = await self._repository.list_all(EntityKind.APPOINTMENT)
        customers = await self._repository.list_all(EntityKind.CUSTOMER)
        logger.info("Building report over %d appointments", len(appointments))
        return AppointmentReport(
            total=len(appointments),
            by_type=count_by_type(appointments),
            by_month=count_by_month(appointments),
            by_customer=count_by_customer(appointments, customers),
        )

    async def contact_schedule(self, contact_id: int) -> list[Appointment]:
        """Appointments for one contact; empty if the contact has none."""
        appointments = await self._repository.list_all(EntityKind.APPOINTMENT)
        return appointments_for_contact(appointments, contact_id)
