"""Booking database model."""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Any

from sqlalchemy import JSON, Date, DateTime, Float, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from stayvista.database import Base


class Booking(Base):
    """Confirmed reservation linking a guest, a host and a room.

    Rows are written once at checkout and never updated. ``room_id`` carries
    no foreign key: deleting a room leaves its bookings in place.
    """

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Parties ({name, email, image}); emails duplicated for filtering
    guest: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    host: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    host_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Room snapshot
    room_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(200))
    location: Mapped[str | None] = mapped_column(String(255))
    category: Mapped[str | None] = mapped_column(String(50))
    image: Mapped[str | None] = mapped_column(Text)

    # Settlement
    price: Mapped[float] = mapped_column(Float, nullable=False)
    date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    check_in: Mapped[dt.date | None] = mapped_column(Date)
    check_out: Mapped[dt.date | None] = mapped_column(Date)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
