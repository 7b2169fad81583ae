"""Statistics response schemas."""

from datetime import datetime

from stayvista.schemas.base import CamelModel

ChartRow = list[str | float]


class StatsResponse(CamelModel):
    total_bookings: int
    total_revenue: float
    chart_data: list[ChartRow]


class AdminStatsResponse(StatsResponse):
    total_users: int
    total_rooms: int


class HostStatsResponse(StatsResponse):
    total_rooms: int
    host_since: datetime | None


class GuestStatsResponse(StatsResponse):
    guest_since: datetime | None
