"""
User repository acting as the read-only user directory for the matching core.
"""

from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.core.exceptions import UserNotFound
from app.models.user import User
from .base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User lookups (``exists`` and ``get`` come from the base)."""

    def __init__(self):
        """Initialize with User model."""
        super().__init__(User)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str
    ) -> Optional[User]:
        """
        Retrieve a user by email address.

        Args:
            db: Active database session
            email: Email to look up (exact match)

        Returns:
            User if found, None otherwise
        """
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user by email {email}: {e}")
            raise

    async def resolve_or_fail(
        self,
        db: AsyncSession,
        user_id: int
    ) -> User:
        """
        Retrieve a user or raise.

        Raises:
            UserNotFound: If no user has this id
        """
        user = await self.get(db, user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    async def lock_pair(
        self,
        db: AsyncSession,
        user_a_id: int,
        user_b_id: int
    ) -> list[int]:
        """
        Row-lock both users until the current transaction ends.

        Locks are taken in ascending id order, so two transactions locking
        the same pair queue up instead of deadlocking. ``FOR NO KEY UPDATE``
        does not conflict with the key-share locks that swipe inserts take
        on their foreign keys. SQLite has no row locks and ignores the
        clause; its single writer already serializes these transactions.

        Returns:
            Ids of the locked users, ascending
        """
        try:
            stmt = (
                select(User.id)
                .where(User.id.in_((user_a_id, user_b_id)))
                .order_by(User.id.asc())
                .with_for_update(key_share=True)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error locking users {user_a_id} and {user_b_id}: {e}")
            raise
