"""Dashboard statistics endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from stayvista.api.deps import (
    CurrentAdmin,
    CurrentHost,
    CurrentIdentity,
    DbSession,
    get_statistics,
)
from stayvista.schemas.stats import (
    AdminStatsResponse,
    GuestStatsResponse,
    HostStatsResponse,
)
from stayvista.services.stats_service import StatisticsAggregator

router = APIRouter()

Statistics = Annotated[StatisticsAggregator, Depends(get_statistics)]


@router.get("/admin-stat", response_model=AdminStatsResponse)
async def admin_stats(admin: CurrentAdmin, db: DbSession, stats: Statistics) -> dict[str, Any]:
    """Platform-wide booking totals plus user and room counts."""
    return await stats.admin_stats(db)


@router.get("/host-stat", response_model=HostStatsResponse)
async def host_stats(host: CurrentHost, db: DbSession, stats: Statistics) -> dict[str, Any]:
    """Totals over the signed-in host's bookings."""
    return await stats.host_stats(db, host.email)


@router.get("/guest-stat", response_model=GuestStatsResponse)
async def guest_stats(identity: CurrentIdentity, db: DbSession, stats: Statistics) -> dict[str, Any]:
    """Totals over the signed-in guest's bookings."""
    return await stats.guest_stats(db, identity.email)
