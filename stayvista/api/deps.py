"""API dependencies for authentication and shared service handles."""

from collections.abc import AsyncGenerator, Callable
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from stayvista.config import Settings
from stayvista.core.access import AccessControlGate, Forbidden, Identity, Unauthorized
from stayvista.core.exceptions import AuthenticationError, AuthorizationError
from stayvista.core.roles import UserRole
from stayvista.database import Database
from stayvista.services.booking_service import BookingOrchestrator
from stayvista.services.notification_service import NotificationService
from stayvista.services.payment_service import PaymentIntentIssuer
from stayvista.services.stats_service import StatisticsAggregator


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One session per request, committed when the handler succeeds."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


def get_access_gate(request: Request) -> AccessControlGate:
    return request.app.state.access_gate


def get_payment_issuer(request: Request) -> PaymentIntentIssuer:
    return request.app.state.payment_issuer


def get_notification_service(request: Request) -> NotificationService:
    return request.app.state.notifications


def get_booking_orchestrator(request: Request) -> BookingOrchestrator:
    return request.app.state.bookings


def get_statistics(request: Request) -> StatisticsAggregator:
    return request.app.state.statistics


async def get_current_identity(
    request: Request,
    gate: Annotated[AccessControlGate, Depends(get_access_gate)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Identity:
    """Authenticate the session cookie; 401 when absent or invalid."""
    decision = gate.authenticate(request.cookies.get(settings.session_cookie_name))
    if isinstance(decision, Unauthorized):
        raise AuthenticationError()
    return decision.identity


def require_role(role: UserRole) -> Callable[..., Any]:
    """Dependency factory: authenticate first, then require the stored ``role``."""

    async def role_checker(
        identity: Annotated[Identity, Depends(get_current_identity)],
        gate: Annotated[AccessControlGate, Depends(get_access_gate)],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> Identity:
        decision = await gate.require_role(db, identity, role)
        if isinstance(decision, Forbidden):
            raise AuthorizationError(decision.reason)
        return decision.identity

    return role_checker


# Convenience dependencies
get_current_host = require_role(UserRole.HOST)
get_current_admin = require_role(UserRole.ADMIN)

CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
CurrentHost = Annotated[Identity, Depends(get_current_host)]
CurrentAdmin = Annotated[Identity, Depends(get_current_admin)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
