"""Room-related Pydantic schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from stayvista.schemas.base import CamelModel, PartyInfo


class RoomBase(CamelModel):
    """Base room schema."""

    category: str | None = Field(None, max_length=50)
    title: str | None = Field(None, max_length=200)
    location: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    image: str | None = None
    guests: int | None = Field(None, ge=1, le=50)
    bedrooms: int | None = Field(None, ge=0, le=50)
    bathrooms: int | None = Field(None, ge=0, le=50)
    available_from: date | None = Field(None, alias="from")
    available_to: date | None = Field(None, alias="to")


class RoomCreate(RoomBase):
    """Schema for listing a room. Host email always comes from the session."""

    price: float = Field(..., gt=0)
    host_name: str | None = Field(None, max_length=200)
    host_image: str | None = None


class RoomUpdate(RoomBase):
    """Schema for a host's full/partial room update."""

    price: float | None = Field(None, gt=0)


class RoomStatusUpdate(CamelModel):
    """Availability toggle: ``status`` true marks the room booked."""

    status: bool


class RoomResponse(RoomBase):
    """Schema for room response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    host: PartyInfo
    price: float
    booked: bool
    created_at: datetime | None = None
