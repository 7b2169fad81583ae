"""Explicit commits for request handlers.

The request session is committed here, before the response is built, so a
storage failure reaches the client as a 500 instead of a false success.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stayvista.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


async def commit_or_fail(db: AsyncSession, action: str) -> None:
    """Commit ``db``; on failure roll back and raise.

    Raises:
        PersistenceError: The commit was rejected by storage
    """
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise PersistenceError(f"Could not {action}")
