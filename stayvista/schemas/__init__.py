"""Pydantic schemas for API validation."""

from stayvista.schemas.auth import SessionRequest, SessionResponse
from stayvista.schemas.base import CamelModel, PartyInfo
from stayvista.schemas.booking import BookingCreate, BookingResponse
from stayvista.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from stayvista.schemas.room import (
    RoomCreate,
    RoomResponse,
    RoomStatusUpdate,
    RoomUpdate,
)
from stayvista.schemas.stats import (
    AdminStatsResponse,
    GuestStatsResponse,
    HostStatsResponse,
)
from stayvista.schemas.user import UserResponse, UserSave, UserUpdate

__all__ = [
    # Auth
    "SessionRequest",
    "SessionResponse",
    # Shared
    "CamelModel",
    "PartyInfo",
    # Booking
    "BookingCreate",
    "BookingResponse",
    # Payment
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    # Room
    "RoomCreate",
    "RoomResponse",
    "RoomStatusUpdate",
    "RoomUpdate",
    # Stats
    "AdminStatsResponse",
    "GuestStatsResponse",
    "HostStatsResponse",
    # User
    "UserResponse",
    "UserSave",
    "UserUpdate",
]
