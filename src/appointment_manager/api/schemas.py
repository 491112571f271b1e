"""Request / response models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator


# ── Entities ─────────────────────────────────────────────

class CustomerIn(BaseModel):
    name: str
    address: str
    postal_code: str
    phone: str
    division_id: int


class CustomerOut(CustomerIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class AppointmentIn(BaseModel):
    title: str
    description: str
    type: str | None = None
    start: datetime
    end: datetime
    customer_id: int
    user_id: int
    contact_id: int

    @model_validator(mode="after")
    def _start_before_end(self) -> "AppointmentIn":
        if self.start >= self.end:
            raise ValueError("start must be before end")
        return self


class AppointmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    type: str | None
    start: datetime | None
    end: datetime | None
    customer_id: int | None
    user_id: int | None
    contact_id: int | None


class ContactIn(BaseModel):
    name: str


class ContactOut(ContactIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class NextIdResponse(BaseModel):
    next_id: int


# ── Login ────────────────────────────────────────────────

class LoginRequest(BaseModel):
    name: str
    password: str


class LoginResponse(BaseModel):
    success: bool


# ── Reports ──────────────────────────────────────────────

class ReportRowOut(BaseModel):
    label: str | None
    count: int


class ReportSummary(BaseModel):
    total: int
    by_type: list[ReportRowOut]
    by_month: list[ReportRowOut]
    by_customer: list[ReportRowOut]
