"""CRUD routers for customers, appointments and contacts.

Endpoints (per entity prefix)
-----------------------------
GET    /                → list every row
GET    /next-id         → max(id) + 1 (409 on an empty table)
GET    /{id}            → one row, 404 if absent
POST   /                → allocate an id and insert
PUT    /{id}            → overwrite mutable fields (unknown id is a no-op)
DELETE /{id}            → remove (unknown id is a no-op)
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from appointment_manager.api.schemas import (
    AppointmentIn,
    AppointmentOut,
    ContactIn,
    ContactOut,
    CustomerIn,
    CustomerOut,
    NextIdResponse,
)
from appointment_manager.database.engine import get_session
from appointment_manager.database.repository import Repository
from appointment_manager.models.entities import ENTITY_TYPES, EntityKind


def build_entity_router(
    kind: EntityKind,
    prefix: str,
    body_model: type[BaseModel],
    out_model: type[BaseModel],
) -> APIRouter:
    """Return a router exposing the repository operations for *kind*."""
    router = APIRouter(prefix=prefix, tags=[kind.value])
    entity_type = ENTITY_TYPES[kind]

    @router.get("", response_model=list[out_model])
    async def list_entities(session: AsyncSession = Depends(get_session)):
        entities = await Repository(session).list_all(kind)
        return [out_model.model_validate(e) for e in entities]

    @router.get("/next-id", response_model=NextIdResponse)
    async def next_id(session: AsyncSession = Depends(get_session)):
        return NextIdResponse(next_id=await Repository(session).next_id(kind))

    @router.get("/{entity_id}", response_model=out_model)
    async def get_entity(entity_id: int, session: AsyncSession = Depends(get_session)):
        entity = await Repository(session).get(kind, entity_id)
        if entity is None:
            raise HTTPException(status_code=404, detail=f"No {kind.value} with id {entity_id}")
        return out_model.model_validate(entity)

    @router.post("", response_model=out_model, status_code=status.HTTP_201_CREATED)
    async def create_entity(body: body_model, session: AsyncSession = Depends(get_session)):
        stored = await Repository(session).insert_new(entity_type(id=0, **body.model_dump()))
        return out_model.model_validate(stored)

    @router.put("/{entity_id}", response_model=out_model)
    async def update_entity(
        entity_id: int, body: body_model, session: AsyncSession = Depends(get_session)
    ):
        entity = entity_type(id=entity_id, **body.model_dump())
        await Repository(session).update(entity)
        return out_model.model_validate(entity)

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entity(entity_id: int, session: AsyncSession = Depends(get_session)):
        await Repository(session).delete(kind, entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


customers_router = build_entity_router(
    EntityKind.CUSTOMER, "/customers", CustomerIn, CustomerOut
)
appointments_router = build_entity_router(
    EntityKind.APPOINTMENT, "/appointments", AppointmentIn, AppointmentOut
)
contacts_router = build_entity_router(
    EntityKind.CONTACT, "/contacts", ContactIn, ContactOut
)
