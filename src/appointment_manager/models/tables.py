"""SQLAlchemy table models."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


class AuditColumns:
    """Creation / last-update stamps carried by every mutable table."""

    create_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_by: Mapped[str] = mapped_column(String(50), nullable=False)
    last_update: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    last_updated_by: Mapped[str] = mapped_column(String(50), nullable=False)


class DivisionRow(Base):
    """First-level division (state, province, region) a customer lives in.

    Read-only reference data; rows are loaded by ``seed.py``.
    """

    __tablename__ = "divisions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)


class CustomerRow(AuditColumns, Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    division_id: Mapped[int] = mapped_column(
        ForeignKey("divisions.id"), nullable=False
    )

    def __repr__(self) -> str:
        return f"<CustomerRow id={self.id} name={self.name!r}>"


class ContactRow(AuditColumns, Base):
    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)


class UserRow(AuditColumns, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<UserRow id={self.id} name={self.name!r}>"


class AppointmentRow(AuditColumns, Base):
    """A scheduled appointment.

    Every appointment references an existing customer, user and contact,
    and must end after it starts.
    """

    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str | None] = mapped_column(String(50))
    start: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    contact_id: Mapped[int] = mapped_column(ForeignKey("contacts.id"), nullable=False)

    __table_args__ = (
        CheckConstraint("start < \"end\"", name="ck_appointments_start_before_end"),
        Index("ix_appointments_customer_id", "customer_id"),
        Index("ix_appointments_contact_id", "contact_id"),
    )

    def __repr__(self) -> str:
        return f"<AppointmentRow id={self.id} title={self.title!r}>"
