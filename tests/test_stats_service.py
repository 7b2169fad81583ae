import uuid
from datetime import UTC, datetime

import pytest

from stayvista.models.booking import Booking
from stayvista.models.room import Room
from stayvista.models.user import User
from stayvista.services.stats_service import (
    CHART_HEADER,
    StatisticsAggregator,
    StatsScope,
    chart_label,
)

HOST = "host@example.com"
OTHER_HOST = "other-host@example.com"
GUEST = "guest@example.com"


def _booking(price: float, host: str = HOST, guest: str = GUEST, when: datetime | None = None) -> Booking:
    return Booking(
        guest={"name": "Ada", "email": guest},
        guest_email=guest,
        host={"name": "Hal", "email": host},
        host_email=host,
        room_id=uuid.uuid4(),
        price=price,
        date=when or datetime(2024, 5, 9, 12, 0, tzinfo=UTC),
        transaction_id=f"pi_{uuid.uuid4().hex[:8]}",
    )


def test_chart_label_has_no_zero_padding():
    assert chart_label(datetime(2024, 5, 9)) == "9/5"
    assert chart_label(datetime(2024, 12, 25)) == "25/12"


@pytest.mark.asyncio
async def test_empty_store_yields_header_only(database):
    async with database.session() as session:
        summary = await StatisticsAggregator().aggregate(session, StatsScope.global_())

    assert summary.total_bookings == 0
    assert summary.total_revenue == 0
    assert summary.chart_data == [CHART_HEADER]


@pytest.mark.asyncio
async def test_global_summary_totals_and_chart(database):
    async with database.session() as session:
        session.add_all([_booking(100), _booking(50)])

    async with database.session() as session:
        summary = await StatisticsAggregator().aggregate(session, StatsScope.global_())

    assert summary.total_bookings == 2
    assert summary.total_revenue == 150
    assert len(summary.chart_data) == 3
    assert summary.chart_data[0] == ["Day", "Sales"]
    # Storage order after the header, no sorting
    assert summary.chart_data[1:] == [["9/5", 100], ["9/5", 50]]


@pytest.mark.asyncio
async def test_scopes_filter_by_host_and_guest(database):
    async with database.session() as session:
        session.add_all(
            [
                _booking(100),
                _booking(40, host=OTHER_HOST),
                _booking(25, guest="someone@example.com"),
            ]
        )

    aggregator = StatisticsAggregator()
    async with database.session() as session:
        host_summary = await aggregator.aggregate(session, StatsScope.host(HOST))
        guest_summary = await aggregator.aggregate(session, StatsScope.guest(GUEST))

    assert (host_summary.total_bookings, host_summary.total_revenue) == (2, 125)
    assert (guest_summary.total_bookings, guest_summary.total_revenue) == (2, 140)


@pytest.mark.asyncio
async def test_role_dashboards(database):
    since = datetime(2023, 1, 2, tzinfo=UTC)
    async with database.session() as session:
        session.add_all(
            [
                User(email=HOST, role="host", timestamp=since),
                User(email=GUEST, role="guest", timestamp=since),
                Room(host={"email": HOST}, host_email=HOST, price=10.0),
                Room(host={"email": HOST}, host_email=HOST, price=20.0),
                Room(host={"email": OTHER_HOST}, host_email=OTHER_HOST, price=30.0),
                _booking(70),
            ]
        )

    aggregator = StatisticsAggregator()
    async with database.session() as session:
        admin = await aggregator.admin_stats(session)
        host = await aggregator.host_stats(session, HOST)
        guest = await aggregator.guest_stats(session, GUEST)
        stranger = await aggregator.guest_stats(session, "nobody@example.com")

    assert (admin["total_users"], admin["total_rooms"], admin["total_bookings"]) == (2, 3, 1)
    assert host["total_rooms"] == 2
    assert host["total_revenue"] == 70
    assert host["host_since"].replace(tzinfo=None) == since.replace(tzinfo=None)
    assert guest["guest_since"] is not None
    assert stranger["guest_since"] is None
    assert stranger["chart_data"] == [CHART_HEADER]


@pytest.mark.asyncio
async def test_chart_rows_keep_storage_order(database):
    async with database.session() as session:
        session.add_all(
            [
                _booking(30, when=datetime(2024, 3, 1, tzinfo=UTC)),
                _booking(10, when=datetime(2024, 1, 15, tzinfo=UTC)),
                _booking(20, when=datetime(2024, 2, 7, tzinfo=UTC)),
            ]
        )

    async with database.session() as session:
        summary = await StatisticsAggregator().aggregate(session, StatsScope.global_())

    assert summary.chart_data == [["Day", "Sales"], ["1/3", 30], ["15/1", 10], ["7/2", 20]]


@pytest.mark.asyncio
async def test_scopes_ignore_email_case(database):
    async with database.session() as session:
        session.add(_booking(45))

    aggregator = StatisticsAggregator()
    async with database.session() as session:
        host = await aggregator.host_stats(session, "Host@Example.com")
        guest = await aggregator.aggregate(session, StatsScope.guest("GUEST@example.com"))

    assert host["total_bookings"] == 1
    assert guest.total_revenue == 45
