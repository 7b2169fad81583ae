"""Booking endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status

from stayvista.api.deps import (
    CurrentHost,
    CurrentIdentity,
    DbSession,
    get_booking_orchestrator,
)
from stayvista.api.routes.rooms import DeleteResponse
from stayvista.core.middleware import booking_limiter
from stayvista.models.booking import Booking
from stayvista.schemas.booking import BookingCreate, BookingResponse
from stayvista.services.booking_service import BookingOrchestrator

router = APIRouter()

Orchestrator = Annotated[BookingOrchestrator, Depends(get_booking_orchestrator)]


@router.post(
    "/booking",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(booking_limiter)],
)
async def create_booking(
    booking_data: BookingCreate,
    identity: CurrentIdentity,
    db: DbSession,
    bookings: Orchestrator,
    background_tasks: BackgroundTasks,
) -> Booking:
    """Save a paid booking and notify guest and host."""
    return await bookings.create_booking(db, booking_data, identity, background_tasks)


@router.delete("/booking/{booking_id}", response_model=DeleteResponse)
async def delete_booking(
    booking_id: UUID,
    identity: CurrentIdentity,
    db: DbSession,
    bookings: Orchestrator,
) -> DeleteResponse:
    """Delete a booking (its guest or host only)."""
    await bookings.delete_booking(db, booking_id, identity)
    return DeleteResponse(deleted_count=1)


@router.get("/my-bookings/{email}", response_model=list[BookingResponse])
async def list_guest_bookings(
    email: str,
    identity: CurrentIdentity,
    db: DbSession,
    bookings: Orchestrator,
) -> list[Booking]:
    """Bookings made by a guest."""
    return await bookings.list_guest_bookings(db, email)


@router.get("/manage-bookings/{email}", response_model=list[BookingResponse])
async def list_host_bookings(
    email: str,
    host: CurrentHost,
    db: DbSession,
    bookings: Orchestrator,
) -> list[Booking]:
    """Bookings received by a host."""
    return await bookings.list_host_bookings(db, email)
