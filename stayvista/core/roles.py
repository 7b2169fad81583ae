"""User roles and role lookup."""

from enum import Enum

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayvista.models.user import User


class UserRole(str, Enum):
    """User roles in the system."""

    GUEST = "guest"
    HOST = "host"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """Host application status."""

    REQUESTED = "Requested"


class RoleResolver:
    """Reads a user's persisted role."""

    async def resolve(self, db: AsyncSession, email: str) -> UserRole | None:
        """Return the stored role for ``email``, or None when there is no usable record."""
        result = await db.execute(select(User.role).where(User.email == email.lower()))
        role = result.scalar_one_or_none()
        if role is None:
            return None
        try:
            return UserRole(role)
        except ValueError:
            return None
