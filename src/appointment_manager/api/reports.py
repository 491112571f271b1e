"""Reports router — grouped appointment counts and the contact drill-down."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from appointment_manager.api.schemas import AppointmentOut, ReportRowOut, ReportSummary
from appointment_manager.database.engine import get_session
from appointment_manager.database.repository import Repository
from appointment_manager.reports.engine import ReportRow
from appointment_manager.reports.service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


def _rows(rows: list[ReportRow]) -> list[ReportRowOut]:
    return [ReportRowOut(label=row.label, count=row.count) for row in rows]


@router.get("/summary", response_model=ReportSummary)
async def summary(session: AsyncSession = Depends(get_session)):
    report = await ReportService(Repository(session)).summary()
    return ReportSummary(
        total=report.total,
        by_type=_rows(report.by_type),
        by_month=_rows(report.by_month),
        by_customer=_rows(report.by_customer),
    )


@router.get("/contacts/{contact_id}/appointments", response_model=list[AppointmentOut])
async def contact_appointments(contact_id: int, session: AsyncSession = Depends(get_session)):
    appointments = await ReportService(Repository(session)).contact_schedule(contact_id)
    return [AppointmentOut.model_validate(a) for a in appointments]
