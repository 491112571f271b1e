"""Domain entities — plain value objects handed out by the repository.

These carry attributes only.  They are detached snapshots of table rows:
changing one never touches the store until it is passed back to
``Repository.update``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class EntityKind(str, Enum):
    """The entity tables the repository knows how to manage."""

    CUSTOMER = "customer"
    APPOINTMENT = "appointment"
    CONTACT = "contact"
    USER = "user"


@dataclass(frozen=True)
class AuditInfo:
    """Creation and last-modification stamps of a stored row."""

    create_date: datetime
    created_by: str
    last_update: datetime
    last_updated_by: str


@dataclass
class Customer:
    id: int
    name: str
    address: str
    postal_code: str
    phone: str
    division_id: int
    audit: AuditInfo | None = field(default=None, compare=False)


@dataclass
class Appointment:
    """A scheduled meeting between a customer, a user and a contact.

    ``start`` and ``end`` are kept in the stored time reference; no
    timezone conversion happens at this layer.
    """

    id: int
    title: str
    description: str
    type: str | None
    start: datetime | None
    end: datetime | None
    customer_id: int | None
    user_id: int | None
    contact_id: int | None
    audit: AuditInfo | None = field(default=None, compare=False)


@dataclass
class Contact:
    id: int
    name: str
    audit: AuditInfo | None = field(default=None, compare=False)


@dataclass
class User:
    """A login account.  ``password`` is an opaque credential string."""

    id: int
    name: str
    password: str
    audit: AuditInfo | None = field(default=None, compare=False)

    def __repr__(self) -> str:
        return f"User(id={self.id}, name={self.name!r})"


ENTITY_TYPES: dict[EntityKind, type] = {
    EntityKind.CUSTOMER: Customer,
    EntityKind.APPOINTMENT: Appointment,
    EntityKind.CONTACT: Contact,
    EntityKind.USER: User,
}


def kind_of(entity: object) -> EntityKind:
    """Return the ``EntityKind`` matching *entity*'s type."""
    for kind, entity_type in ENTITY_TYPES.items():
        if isinstance(entity, entity_type):
            return kind
    raise TypeError(f"Not a managed entity: {type(entity).__name__}")
