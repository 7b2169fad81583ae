"""User endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from stayvista.api.deps import CurrentAdmin, DbSession, get_notification_service
from stayvista.core.exceptions import NotFoundError, PersistenceError
from stayvista.core.persistence import commit_or_fail
from stayvista.core.roles import UserRole, UserStatus
from stayvista.models.user import User
from stayvista.schemas.user import UserResponse, UserSave, UserUpdate
from stayvista.services.notification_service import NotificationService

router = APIRouter()


async def _get_user_by_email(db: DbSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def _insert_user(db: DbSession, user_data: UserSave) -> User | None:
    """Insert a new guest; None when a concurrent request inserted the email first."""
    user = User(
        email=user_data.email,
        name=user_data.name,
        image=user_data.image,
        role=UserRole.GUEST.value,
        status=user_data.status.value if user_data.status else None,
        timestamp=datetime.now(UTC),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        return None
    return user


@router.put("/user", response_model=UserResponse)
async def save_user(
    user_data: UserSave,
    db: DbSession,
    background_tasks: BackgroundTasks,
    notifications: Annotated[NotificationService, Depends(get_notification_service)],
) -> User:
    """Upsert on sign-in; also records a guest's request to become a host.

    An existing user is returned unchanged unless the body asks for
    ``status: "Requested"``.
    """
    user = await _get_user_by_email(db, user_data.email)
    created = False
    if user is None:
        user = await _insert_user(db, user_data)
        if user is None:
            # Lost the race on the unique email; use the winner's row
            user = await _get_user_by_email(db, user_data.email)
            if user is None:
                raise PersistenceError("Could not save the user")
        else:
            created = True

    if not created and user_data.status == UserStatus.REQUESTED:
        user.status = UserStatus.REQUESTED.value

    await commit_or_fail(db, "save the user")

    if created:
        background_tasks.add_task(notifications.notify_welcome, user.email)
    return user


@router.get("/users", response_model=list[UserResponse])
async def get_users(
    admin: CurrentAdmin,
    db: DbSession,
) -> list[User]:
    """List all users (admin only)."""
    result = await db.execute(select(User).order_by(User.timestamp.desc()))
    return list(result.scalars().all())


@router.get("/users/{email}", response_model=UserResponse)
async def get_user(email: str, db: DbSession) -> User:
    """Get a user (and thereby their role) by email."""
    user = await _get_user_by_email(db, email)
    if not user:
        raise NotFoundError("User", email)
    return user


@router.patch("/user/update/{email}", response_model=UserResponse)
async def update_user(email: str, updates: UserUpdate, db: DbSession) -> User:
    """Change a user's role and/or status; refreshes the user's timestamp."""
    user = await _get_user_by_email(db, email)
    if not user:
        raise NotFoundError("User", email)

    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(user, field, value.value if value is not None else None)
    user.timestamp = datetime.now(UTC)
    await commit_or_fail(db, "update the user")
    return user
