"""User-related Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from stayvista.core.roles import UserRole, UserStatus
from stayvista.schemas.base import CamelModel, NormalizedEmail


class UserSave(CamelModel):
    """Body of ``PUT /user``: sign-in upsert or host application."""

    email: NormalizedEmail
    name: str | None = Field(None, max_length=200)
    image: str | None = None
    status: UserStatus | None = None


class UserUpdate(CamelModel):
    """Admin-driven role/status change."""

    role: UserRole | None = None
    status: UserStatus | None = None


class UserResponse(CamelModel):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str | None
    image: str | None
    role: UserRole
    status: UserStatus | None
    timestamp: datetime
