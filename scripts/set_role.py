#!/usr/bin/env python3
"""Promote (or demote) a user directly in the database.

Usage:
    python scripts/set_role.py --email admin@stayvista.com --role admin
    python scripts/set_role.py --email host@stayvista.com --role host --create
"""

import argparse
import asyncio
from datetime import UTC, datetime

from sqlalchemy import select

from stayvista.config import get_settings
from stayvista.core.roles import UserRole
from stayvista.database import Database
from stayvista.models.user import User


async def set_role(email: str, role: UserRole, create: bool = False) -> None:
    """Set ``role`` on the user with ``email``; optionally create the user."""
    database = Database.from_settings(get_settings())
    try:
        async with database.session() as session:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()

            if user:
                user.role = role.value
                user.status = None
                user.timestamp = datetime.now(UTC)
                print(f"Updated existing user: {email}")
            elif create:
                session.add(
                    User(email=email, role=role.value, timestamp=datetime.now(UTC))
                )
                print(f"Created user: {email}")
            else:
                print(f"ERROR: No user with email {email} (pass --create to add one)")
                return

        print(f"Role: {role.value}")
    finally:
        await database.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Set a user's role")
    parser.add_argument("--email", required=True, help="User email")
    parser.add_argument(
        "--role",
        choices=[r.value for r in UserRole],
        default=UserRole.ADMIN.value,
        help="Role to assign",
    )
    parser.add_argument("--create", action="store_true", help="Create the user if missing")

    args = parser.parse_args()

    asyncio.run(set_role(args.email, UserRole(args.role), create=args.create))
