"""Booking statistics per actor role (read-only queries)."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from stayvista.models.booking import Booking
from stayvista.models.room import Room
from stayvista.models.user import User

CHART_HEADER: list[str | float] = ["Day", "Sales"]


class ScopeKind(str, Enum):
    GLOBAL = "global"
    HOST = "host"
    GUEST = "guest"


@dataclass(frozen=True)
class StatsScope:
    """Which bookings a summary covers."""

    kind: ScopeKind
    email: str | None = None

    @classmethod
    def global_(cls) -> "StatsScope":
        return cls(ScopeKind.GLOBAL)

    @classmethod
    def host(cls, email: str) -> "StatsScope":
        return cls(ScopeKind.HOST, email.lower())

    @classmethod
    def guest(cls, email: str) -> "StatsScope":
        return cls(ScopeKind.GUEST, email.lower())


@dataclass
class BookingSummary:
    total_bookings: int
    total_revenue: float
    chart_data: list[list[str | float]]


def chart_label(value: datetime) -> str:
    """Day/month label without zero padding, e.g. ``9/5`` for 9 May."""
    return f"{value.day}/{value.month}"


class StatisticsAggregator:
    """Summaries over booking records for admins, hosts and guests."""

    async def aggregate(self, db: AsyncSession, scope: StatsScope) -> BookingSummary:
        """Scan the scoped bookings, reading only ``date`` and ``price``.

        Rows are charted in the order storage returns them; the header row
        always comes first.
        """
        query = select(Booking.date, Booking.price)
        if scope.kind == ScopeKind.HOST:
            query = query.where(Booking.host_email == scope.email)
        elif scope.kind == ScopeKind.GUEST:
            query = query.where(Booking.guest_email == scope.email)

        result = await db.execute(query)
        rows = result.all()

        chart_data: list[list[str | float]] = [list(CHART_HEADER)]
        chart_data.extend([chart_label(booked_on), price] for booked_on, price in rows)

        return BookingSummary(
            total_bookings=len(rows),
            total_revenue=sum((price for _, price in rows), 0),
            chart_data=chart_data,
        )

    async def _user_since(self, db: AsyncSession, email: str) -> datetime | None:
        result = await db.execute(select(User.timestamp).where(User.email == email))
        return result.scalar_one_or_none()

    async def _count(self, db: AsyncSession, model: type, *criteria: Any) -> int:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        result = await db.execute(query)
        return result.scalar() or 0

    async def admin_stats(self, db: AsyncSession) -> dict[str, Any]:
        summary = await self.aggregate(db, StatsScope.global_())
        return {
            "total_users": await self._count(db, User),
            "total_rooms": await self._count(db, Room),
            "total_bookings": summary.total_bookings,
            "total_revenue": summary.total_revenue,
            "chart_data": summary.chart_data,
        }

    async def host_stats(self, db: AsyncSession, email: str) -> dict[str, Any]:
        email = email.lower()
        summary = await self.aggregate(db, StatsScope.host(email))
        return {
            "total_rooms": await self._count(db, Room, Room.host_email == email),
            "total_bookings": summary.total_bookings,
            "total_revenue": summary.total_revenue,
            "chart_data": summary.chart_data,
            "host_since": await self._user_since(db, email),
        }

    async def guest_stats(self, db: AsyncSession, email: str) -> dict[str, Any]:
        email = email.lower()
        summary = await self.aggregate(db, StatsScope.guest(email))
        return {
            "total_bookings": summary.total_bookings,
            "total_revenue": summary.total_revenue,
            "chart_data": summary.chart_data,
            "guest_since": await self._user_since(db, email),
        }
