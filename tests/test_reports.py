"""Tests for the pure reporting functions."""

from datetime import datetime

import pytest

from appointment_manager.models.entities import Appointment, Customer
from appointment_manager.reports.engine import (
    ReportRow,
    appointments_for_contact,
    count_by_customer,
    count_by_month,
    count_by_type,
    group_and_count,
)


def _appt(appointment_id, type="Planning Session", start=datetime(2024, 5, 6, 9),
          customer_id=1, contact_id=1) -> Appointment:
    end = start.replace(hour=start.hour + 1) if start is not None else None
    return Appointment(
        appointment_id, f"Title {appointment_id}", "desc", type,
        start, end, customer_id, 1, contact_id,
    )


@pytest.fixture
def appointments() -> list[Appointment]:
    return [
        _appt(1, "Planning Session", datetime(2024, 5, 6, 9), customer_id=1, contact_id=3),
        _appt(2, "De-Briefing", datetime(2024, 5, 13, 14), customer_id=2, contact_id=2),
        _appt(3, "Planning Session", datetime(2024, 6, 3, 11), customer_id=1, contact_id=3),
        _appt(4, "planning session", datetime(2024, 1, 8, 10), customer_id=3, contact_id=1),
        _appt(5, None, datetime(2024, 6, 20, 16), customer_id=None, contact_id=3),
    ]


@pytest.fixture
def customers() -> list[Customer]:
    return [
        Customer(1, "Acme Ltd", "1 Main St", "12345", "555-0100", 1),
        Customer(2, "Globex", "9 High St", "AB1 2CD", "555-0199", 101),
    ]


# ── group_and_count ──────────────────────────────────────

def test_group_and_count_first_seen_order():
    rows = group_and_count(["b", "a", "b", "c", "a", "b"], key=lambda s: s)
    assert rows == [ReportRow("b", 3), ReportRow("a", 2), ReportRow("c", 1)]


def test_group_and_count_empty_input():
    assert group_and_count([], key=lambda s: s) == []


def test_group_and_count_none_is_its_own_group():
    rows = group_and_count([None, "x", None], key=lambda s: s)
    assert rows == [ReportRow(None, 2), ReportRow("x", 1)]


# ── count_by_type ────────────────────────────────────────

def test_count_by_type(appointments):
    rows = count_by_type(appointments)
    assert rows == [
        ReportRow("Planning Session", 2),
        ReportRow("De-Briefing", 1),
        ReportRow("planning session", 1),
        ReportRow(None, 1),
    ]


# ── count_by_month ───────────────────────────────────────

def test_count_by_month_single_year_is_chronological(appointments):
    rows = count_by_month(appointments)
    assert rows == [
        ReportRow("January", 1),
        ReportRow("May", 2),
        ReportRow("June", 2),
    ]


def test_count_by_month_adds_year_when_spanning_years():
    rows = count_by_month([
        _appt(1, start=datetime(2025, 3, 2, 9)),
        _appt(2, start=datetime(2024, 3, 9, 9)),
        _appt(3, start=datetime(2024, 12, 1, 9)),
    ])
    assert rows == [
        ReportRow("March 2024", 1),
        ReportRow("December 2024", 1),
        ReportRow("March 2025", 1),
    ]


def test_count_by_month_missing_start_sorts_last():
    rows = count_by_month([_appt(1, start=None), _appt(2, start=datetime(2024, 2, 5, 9))])
    assert rows == [ReportRow("February", 1), ReportRow(None, 1)]


# ── count_by_customer ────────────────────────────────────

def test_count_by_customer_uses_names(appointments, customers):
    rows = count_by_customer(appointments, customers)
    assert rows == [
        ReportRow("Acme Ltd", 2),
        ReportRow("Globex", 1),
        ReportRow("Customer #3", 1),
        ReportRow(None, 1),
    ]


def test_count_by_customer_keeps_namesakes_apart():
    customers = [
        Customer(1, "Pat Smith", "a", "1", "1", 1),
        Customer(2, "Pat Smith", "b", "2", "2", 1),
    ]
    rows = count_by_customer([_appt(1, customer_id=1), _appt(2, customer_id=2)], customers)
    assert rows == [ReportRow("Pat Smith", 1), ReportRow("Pat Smith", 1)]


# ── totals add up ────────────────────────────────────────

def test_every_report_accounts_for_every_appointment(appointments, customers):
    for rows in (
        count_by_type(appointments),
        count_by_month(appointments),
        count_by_customer(appointments, customers),
    ):
        assert sum(count for _, count in rows) == len(appointments)


# ── appointments_for_contact ─────────────────────────────

def test_appointments_for_contact_preserves_order(appointments):
    assert [a.id for a in appointments_for_contact(appointments, 3)] == [1, 3, 5]


def test_appointments_for_contact_no_match(appointments):
    assert appointments_for_contact(appointments, 99) == []
