"""Booking workflow.

Checkout happens in two client-driven steps: the client first obtains a
payment-intent client secret (see ``payment_service``), confirms the payment
with the gateway, then submits the booking here with the resulting
transaction id. The id is trusted as supplied and the room's availability
flag is left to the caller (``set_room_status``); neither step is
reconciled against the gateway.

Notification side effects are registered as post-commit hooks and only run
once the booking row has been committed.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import UTC, datetime
from uuid import UUID

from fastapi import BackgroundTasks
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayvista.core.access import Identity
from stayvista.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from stayvista.core.persistence import commit_or_fail
from stayvista.models.booking import Booking
from stayvista.models.room import Room
from stayvista.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)

PostCommitHook = Callable[[Booking], Awaitable[None]]


class BookingOrchestrator:
    """Creates, lists and deletes bookings."""

    def __init__(self, post_commit_hooks: Sequence[PostCommitHook] = ()) -> None:
        self.post_commit_hooks: list[PostCommitHook] = list(post_commit_hooks)

    def add_post_commit_hook(self, hook: PostCommitHook) -> None:
        self.post_commit_hooks.append(hook)

    async def create_booking(
        self,
        db: AsyncSession,
        data: BookingCreate,
        identity: Identity,
        background_tasks: BackgroundTasks | None = None,
    ) -> Booking:
        """Persist a booking, then fire post-commit hooks.

        Hooks are queued on ``background_tasks`` when given (they run after
        the response is sent) and awaited inline otherwise.

        Raises:
            ValidationError: Guest is not the caller, or the room does not exist
            PersistenceError: The booking could not be committed
        """
        if data.guest.email != identity.email:
            raise ValidationError("Bookings can only be made for the signed-in guest")

        room = await db.get(Room, data.room_id)
        if room is None:
            raise ValidationError(f"Room '{data.room_id}' does not exist")

        booking = Booking(
            guest=data.guest.model_dump(mode="json"),
            guest_email=data.guest.email,
            host=data.host.model_dump(mode="json"),
            host_email=data.host.email,
            room_id=room.id,
            title=data.title,
            location=data.location,
            category=data.category,
            image=data.image,
            price=data.price,
            date=data.date or datetime.now(UTC),
            check_in=data.check_in,
            check_out=data.check_out,
            transaction_id=data.transaction_id,
        )
        db.add(booking)
        await commit_or_fail(db, "save the booking")

        logger.info(
            f"Booking {booking.id} saved: room={booking.room_id} guest={booking.guest_email} "
            f"transaction={booking.transaction_id}"
        )

        if background_tasks is not None:
            background_tasks.add_task(self.run_post_commit_hooks, booking)
        else:
            await self.run_post_commit_hooks(booking)

        return booking

    async def run_post_commit_hooks(self, booking: Booking) -> None:
        """Run every hook; a failing hook is logged and does not stop the others."""
        for hook in self.post_commit_hooks:
            try:
                await hook(booking)
            except Exception:
                logger.exception(
                    f"Post-commit hook {getattr(hook, '__name__', hook)!r} failed for booking {booking.id}"
                )

    async def delete_booking(self, db: AsyncSession, booking_id: UUID, identity: Identity) -> None:
        """Delete a booking on behalf of its guest or host.

        Raises:
            NotFoundError: Unknown booking
            AuthorizationError: Caller is neither the guest nor the host
        """
        booking = await db.get(Booking, booking_id)
        if booking is None:
            raise NotFoundError("Booking", str(booking_id))

        if identity.email not in (booking.guest_email, booking.host_email):
            raise AuthorizationError("Only the booking's guest or host can delete it")

        await db.delete(booking)
        await commit_or_fail(db, "delete the booking")
        logger.info(f"Booking {booking_id} deleted by {identity.email}")

    async def list_guest_bookings(self, db: AsyncSession, email: str) -> list[Booking]:
        result = await db.execute(select(Booking).where(Booking.guest_email == email.lower()))
        return list(result.scalars().all())

    async def list_host_bookings(self, db: AsyncSession, email: str) -> list[Booking]:
        result = await db.execute(select(Booking).where(Booking.host_email == email.lower()))
        return list(result.scalars().all())

    async def set_room_status(self, db: AsyncSession, room_id: UUID, booked: bool) -> Room:
        """Flip a room's availability flag. Not linked to booking creation.

        Raises:
            NotFoundError: Unknown room
        """
        room = await db.get(Room, room_id)
        if room is None:
            raise NotFoundError("Room", str(room_id))
        room.booked = booked
        await commit_or_fail(db, "update the room status")
        return room
