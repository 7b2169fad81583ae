import uuid
from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from stayvista.core.access import Identity
from stayvista.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from stayvista.models.booking import Booking
from stayvista.models.room import Room
from stayvista.schemas.booking import BookingCreate
from stayvista.services.booking_service import BookingOrchestrator

GUEST = "guest@example.com"
HOST = "host@example.com"


async def _add_room(database) -> Room:
    async with database.session() as session:
        room = Room(
            host={"name": "Hal", "email": HOST, "image": None},
            host_email=HOST,
            title="Loft",
            category="City",
            price=80.0,
        )
        session.add(room)
    return room


def _payload(room_id: uuid.UUID, guest_email: str = GUEST, price: float = 80.0) -> BookingCreate:
    return BookingCreate(
        guest={"name": "Ada", "email": guest_email},
        host={"name": "Hal", "email": HOST},
        room_id=room_id,
        title="Loft",
        price=price,
        transaction_id="pi_abc",
    )


@pytest.mark.asyncio
async def test_create_booking_persists_and_runs_hooks(database):
    room = await _add_room(database)
    seen: list[Booking] = []

    async def record(booking: Booking) -> None:
        seen.append(booking)

    orchestrator = BookingOrchestrator([record])
    async with database.session() as session:
        booking = await orchestrator.create_booking(session, _payload(room.id), Identity(GUEST))

    assert seen == [booking]
    async with database.session() as session:
        stored = await orchestrator.list_guest_bookings(session, GUEST)
        assert [b.id for b in stored] == [booking.id]
        assert stored[0].transaction_id == "pi_abc"
        assert stored[0].host_email == HOST
        assert stored[0].date is not None


@pytest.mark.asyncio
async def test_failing_hook_does_not_undo_booking_or_stop_other_hooks(database):
    room = await _add_room(database)
    seen: list[uuid.UUID] = []

    async def explode(booking: Booking) -> None:
        raise RuntimeError("smtp down")

    async def record(booking: Booking) -> None:
        seen.append(booking.id)

    orchestrator = BookingOrchestrator([explode])
    orchestrator.add_post_commit_hook(record)
    async with database.session() as session:
        booking = await orchestrator.create_booking(session, _payload(room.id), Identity(GUEST))

    assert seen == [booking.id]
    async with database.session() as session:
        assert len(await orchestrator.list_host_bookings(session, HOST)) == 1


@pytest.mark.asyncio
async def test_booking_for_another_guest_is_rejected(database):
    room = await _add_room(database)
    orchestrator = BookingOrchestrator()

    with pytest.raises(ValidationError):
        async with database.session() as session:
            await orchestrator.create_booking(
                session, _payload(room.id, guest_email="someone@example.com"), Identity(GUEST)
            )


@pytest.mark.asyncio
async def test_booking_unknown_room_is_rejected(database):
    hooks_ran: list[Booking] = []

    async def record(booking: Booking) -> None:
        hooks_ran.append(booking)

    orchestrator = BookingOrchestrator([record])

    with pytest.raises(ValidationError):
        async with database.session() as session:
            await orchestrator.create_booking(session, _payload(uuid.uuid4()), Identity(GUEST))

    assert hooks_ran == []
    async with database.session() as session:
        assert await orchestrator.list_guest_bookings(session, GUEST) == []


@pytest.mark.asyncio
async def test_delete_booking_restricted_to_parties(database):
    room = await _add_room(database)
    orchestrator = BookingOrchestrator()
    async with database.session() as session:
        booking = await orchestrator.create_booking(session, _payload(room.id), Identity(GUEST))

    with pytest.raises(AuthorizationError):
        async with database.session() as session:
            await orchestrator.delete_booking(session, booking.id, Identity("stranger@example.com"))

    async with database.session() as session:
        await orchestrator.delete_booking(session, booking.id, Identity(HOST))

    async with database.session() as session:
        assert await orchestrator.list_guest_bookings(session, GUEST) == []
        assert await orchestrator.list_host_bookings(session, HOST) == []

    with pytest.raises(NotFoundError):
        async with database.session() as session:
            await orchestrator.delete_booking(session, booking.id, Identity(GUEST))


@pytest.mark.asyncio
async def test_set_room_status(database):
    room = await _add_room(database)
    orchestrator = BookingOrchestrator()

    async with database.session() as session:
        updated = await orchestrator.set_room_status(session, room.id, True)
        assert updated.booked is True

    async with database.session() as session:
        assert (await session.get(Room, room.id)).booked is True

    with pytest.raises(NotFoundError):
        async with database.session() as session:
            await orchestrator.set_room_status(session, uuid.uuid4(), False)


def test_check_out_before_check_in_is_invalid():
    with pytest.raises(ValueError):
        BookingCreate.model_validate(
            {
                "guest": {"email": GUEST},
                "host": {"email": HOST},
                "roomId": str(uuid.uuid4()),
                "price": 10,
                "transactionId": "pi_x",
                "from": "2026-05-10",
                "to": "2026-05-01",
                "date": datetime.now(UTC).isoformat(),
            }
        )


@pytest.mark.asyncio
async def test_failed_commit_raises_persistence_error_and_skips_hooks(database, monkeypatch):
    room = await _add_room(database)
    seen: list[Booking] = []

    async def record(booking: Booking) -> None:
        seen.append(booking)

    async def failing_commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    orchestrator = BookingOrchestrator([record])
    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    with pytest.raises(PersistenceError):
        session = database.session_factory()
        try:
            await orchestrator.create_booking(session, _payload(room.id), Identity(GUEST))
        finally:
            await session.close()
    monkeypatch.undo()

    assert seen == []
    async with database.session() as session:
        assert await orchestrator.list_guest_bookings(session, GUEST) == []
