"""Booking-related Pydantic schemas."""

import datetime as dt
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from stayvista.schemas.base import CamelModel, PartyInfo


class BookingCreate(CamelModel):
    """Checkout payload submitted after the client confirmed the payment intent."""

    guest: PartyInfo
    host: PartyInfo
    room_id: UUID
    title: str | None = Field(None, max_length=200)
    location: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=50)
    image: str | None = None
    price: float = Field(..., gt=0)
    date: dt.datetime | None = None
    check_in: dt.date | None = Field(None, alias="from")
    check_out: dt.date | None = Field(None, alias="to")
    transaction_id: str = Field(..., min_length=1, max_length=255)

    @field_validator("check_out")
    @classmethod
    def validate_checkout(cls, v: dt.date | None, info) -> dt.date | None:
        check_in = info.data.get("check_in")
        if v and check_in and v < check_in:
            raise ValueError("check-out must not be before check-in")
        return v


class BookingResponse(CamelModel):
    """Schema for booking response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    guest: PartyInfo
    host: PartyInfo
    room_id: UUID
    title: str | None
    location: str | None
    category: str | None
    image: str | None
    price: float
    date: dt.datetime
    check_in: dt.date | None = Field(None, alias="from")
    check_out: dt.date | None = Field(None, alias="to")
    transaction_id: str
