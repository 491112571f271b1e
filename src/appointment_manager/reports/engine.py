"""Reporting engine — grouped appointment counts and the contact drill-down.

All functions here are pure: they work on already-fetched sequences and
perform no I/O.  Every grouping keeps appointments whose key is missing in
a group of their own, so the counts of a report always add up to the
number of appointments it was built from.
"""

from __future__ import annotations

import calendar
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import NamedTuple, TypeVar

from appointment_manager.models.entities import Appointment, Customer

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


class ReportRow(NamedTuple):
    """One line of a grouped report."""

    label: str | None
    count: int


def group_and_count(
    items: Iterable[T],
    key: Callable[[T], K],
    label: Callable[[K], str | None] = lambda k: k,
    order: Callable[[K], object] | None = None,
) -> list[ReportRow]:
    """Count *items* per distinct ``key(item)``.

    Rows come out in first-seen key order unless *order* gives a sort key.
    ``None`` is a key like any other and gets its own row.
    """
    counts: dict[K, int] = {}
    for item in items:
        k = key(item)
        counts[k] = counts.get(k, 0) + 1
    keys = sorted(counts, key=order) if order is not None else list(counts)
    return [ReportRow(label(k), counts[k]) for k in keys]


def count_by_type(appointments: Iterable[Appointment]) -> list[ReportRow]:
    """Appointments per type (exact, case-sensitive match)."""
    return group_and_count(appointments, key=lambda a: a.type)


def count_by_month(appointments: Sequence[Appointment]) -> list[ReportRow]:
    """Appointments per calendar month of their start time.

    Labels are English month names (``"March"``); when the appointments
    span more than one year the year is appended (``"March 2024"``).
    Rows are chronological, with appointments lacking a start time last.
    """

    def month_key(appointment: Appointment) -> tuple[int, int] | None:
        if appointment.start is None:
            return None
        return appointment.start.year, appointment.start.month

    years = {a.start.year for a in appointments if a.start is not None}
    multi_year = len(years) > 1

    def month_label(k: tuple[int, int] | None) -> str | None:
        if k is None:
            return None
        year, month = k
        name = calendar.month_name[month]
        return f"{name} {year}" if multi_year else name

    return group_and_count(
        appointments,
        key=month_key,
        label=month_label,
        order=lambda k: (k is None, k or (0, 0)),
    )


def count_by_customer(
    appointments: Iterable[Appointment],
    customers: Iterable[Customer],
) -> list[ReportRow]:
    """Appointments per customer, labelled with the customer's name.

    Grouping is by customer id, so two customers sharing a name stay on
    separate rows.  An id with no matching customer is labelled
    ``"Customer #<id>"``.
    """
    names = {c.id: c.name for c in customers}

    def customer_label(customer_id: int | None) -> str | None:
        if customer_id is None:
            return None
        return names.get(customer_id, f"Customer #{customer_id}")

    return group_and_count(
        appointments, key=lambda a: a.customer_id, label=customer_label
    )


def appointments_for_contact(
    appointments: Iterable[Appointment], contact_id: int
) -> list[Appointment]:
    """Appointments assigned to *contact_id*, in their original order."""
    return [a for a in appointments if a.contact_id == contact_id]
