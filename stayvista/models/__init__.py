"""Database models."""

from stayvista.models.booking import Booking
from stayvista.models.room import Room
from stayvista.models.user import User

__all__ = [
    "Booking",
    "Room",
    "User",
]
