"""Room endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select

from stayvista.api.deps import (
    CurrentHost,
    DbSession,
    get_booking_orchestrator,
)
from stayvista.core.access import Identity
from stayvista.core.exceptions import AuthorizationError, NotFoundError
from stayvista.core.persistence import commit_or_fail
from stayvista.models.room import Room
from stayvista.schemas.base import CamelModel
from stayvista.schemas.room import RoomCreate, RoomResponse, RoomStatusUpdate, RoomUpdate
from stayvista.services.booking_service import BookingOrchestrator

router = APIRouter()


class DeleteResponse(CamelModel):
    deleted_count: int


async def _get_owned_room(db: DbSession, room_id: UUID, host: Identity) -> Room:
    room = await db.get(Room, room_id)
    if not room:
        raise NotFoundError("Room", str(room_id))
    if room.host_email != host.email:
        raise AuthorizationError("Only the room's host can change it")
    return room


@router.get("/rooms", response_model=list[RoomResponse])
async def list_rooms(
    db: DbSession,
    category: str | None = Query(default=None),
) -> list[Room]:
    """List rooms, optionally filtered by category."""
    query = select(Room)
    # The web client sends the literal string "null" when no category is picked
    if category and category != "null":
        query = query.where(Room.category == category)
    result = await db.execute(query)
    return list(result.scalars().all())


@router.get("/rooms/{room_id}", response_model=RoomResponse)
async def get_room(room_id: UUID, db: DbSession) -> Room:
    """Get a room by ID."""
    room = await db.get(Room, room_id)
    if not room:
        raise NotFoundError("Room", str(room_id))
    return room


@router.post("/room", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(room_data: RoomCreate, host: CurrentHost, db: DbSession) -> Room:
    """List a new room for the signed-in host."""
    fields = room_data.model_dump(exclude={"host_name", "host_image"})
    room = Room(
        **fields,
        host={"name": room_data.host_name, "email": host.email, "image": room_data.host_image},
        host_email=host.email,
        booked=False,
    )
    db.add(room)
    await commit_or_fail(db, "save the room")
    await db.refresh(room)
    return room


@router.put("/room/update/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: UUID,
    updates: RoomUpdate,
    host: CurrentHost,
    db: DbSession,
) -> Room:
    """Update a room's details (owning host only)."""
    room = await _get_owned_room(db, room_id, host)
    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(room, field, value)
    await commit_or_fail(db, "update the room")
    return room


@router.delete("/room/{room_id}", response_model=DeleteResponse)
async def delete_room(room_id: UUID, host: CurrentHost, db: DbSession) -> DeleteResponse:
    """Delete a room (owning host only). Existing bookings are kept."""
    room = await _get_owned_room(db, room_id, host)
    await db.delete(room)
    await commit_or_fail(db, "delete the room")
    return DeleteResponse(deleted_count=1)


@router.patch("/room/status/{room_id}", response_model=RoomResponse)
async def update_room_status(
    room_id: UUID,
    body: RoomStatusUpdate,
    db: DbSession,
    bookings: Annotated[BookingOrchestrator, Depends(get_booking_orchestrator)],
) -> Room:
    """Mark a room booked or available."""
    return await bookings.set_room_status(db, room_id, body.status)


@router.get("/my-listings/{email}", response_model=list[RoomResponse])
async def list_host_rooms(email: str, host: CurrentHost, db: DbSession) -> list[Room]:
    """List the rooms a host has published."""
    result = await db.execute(select(Room).where(Room.host_email == email.lower()))
    return list(result.scalars().all())
