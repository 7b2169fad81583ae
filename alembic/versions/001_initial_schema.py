"""Initial database schema.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Creates the StayVista tables:
- Users (accounts, roles, host applications)
- Rooms (host listings)
- Bookings (paid reservations)
"""

from typing import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all database tables."""

    # ==================== USERS ====================
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("name", sa.String(200)),
        sa.Column("image", sa.Text),
        sa.Column("role", sa.String(20), nullable=False, server_default="guest"),
        sa.Column("status", sa.String(20)),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ==================== ROOMS ====================
    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("host", sa.JSON, nullable=False),
        sa.Column("host_email", sa.String(255), nullable=False, index=True),
        sa.Column("category", sa.String(50), index=True),
        sa.Column("title", sa.String(200)),
        sa.Column("location", sa.String(255)),
        sa.Column("description", sa.Text),
        sa.Column("image", sa.Text),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("guests", sa.Integer),
        sa.Column("bedrooms", sa.Integer),
        sa.Column("bathrooms", sa.Integer),
        sa.Column("available_from", sa.Date),
        sa.Column("available_to", sa.Date),
        sa.Column("booked", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ==================== BOOKINGS ====================
    # room_id has no foreign key: deleting a room keeps its bookings
    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("guest", sa.JSON, nullable=False),
        sa.Column("guest_email", sa.String(255), nullable=False, index=True),
        sa.Column("host", sa.JSON, nullable=False),
        sa.Column("host_email", sa.String(255), nullable=False, index=True),
        sa.Column("room_id", sa.Uuid, nullable=False, index=True),
        sa.Column("title", sa.String(200)),
        sa.Column("location", sa.String(255)),
        sa.Column("category", sa.String(50)),
        sa.Column("image", sa.Text),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("check_in", sa.Date),
        sa.Column("check_out", sa.Date),
        sa.Column("transaction_id", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    """Drop all database tables in reverse order."""
    op.drop_table("bookings")
    op.drop_table("rooms")
    op.drop_table("users")
