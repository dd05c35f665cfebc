"""
Match repository for confirmed mutual matches.

A match row represents an unordered pair of users. Rows are written with the
smaller id in ``user1_id`` so the ``(user1_id, user2_id)`` unique constraint
rejects a second match for the same pair no matter which user triggered it.
"""

from __future__ import annotations
from sqlalchemy import select, and_, or_, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.match import Match, MATCH_PAIR_CONSTRAINT
from .base import BaseRepository

logger = logging.getLogger(__name__)


class MatchRepository(BaseRepository[Match]):
    """Repository for Match model."""

    def __init__(self):
        """Initialize with Match model."""
        super().__init__(Match)

    async def are_matched(
        self,
        db: AsyncSession,
        user1_id: int,
        user2_id: int
    ) -> bool:
        """
        Check whether two users are already matched, in either slot order.

        Args:
            db: Active database session
            user1_id: ID of one user
            user2_id: ID of the other user

        Returns:
            True if a match exists for the unordered pair
        """
        try:
            stmt = select(func.count(Match.id)).where(
                or_(
                    and_(Match.user1_id == user1_id, Match.user2_id == user2_id),
                    and_(Match.user1_id == user2_id, Match.user2_id == user1_id)
                )
            )
            result = await db.execute(stmt)
            return result.scalar_one() > 0

        except SQLAlchemyError as e:
            logger.error(f"Error checking match between {user1_id} and {user2_id}: {e}")
            raise

    async def create(
        self,
        db: AsyncSession,
        user1_id: int,
        user2_id: int
    ) -> Match:
        """
        Persist a new match for the unordered pair.

        The insert runs in a SAVEPOINT so that losing a race to a concurrent
        creator only discards the match row, not the caller's swipe.

        Args:
            db: Active database session
            user1_id: ID of one user
            user2_id: ID of the other user

        Returns:
            Created Match with both users loaded

        Raises:
            ConstraintViolation: If the pair already has a match
        """
        low, high = sorted((user1_id, user2_id))
        return await super().create(
            db,
            {"user1_id": low, "user2_id": high},
            constraint=MATCH_PAIR_CONSTRAINT,
            savepoint=True,
        )

    async def find_for_user(
        self,
        db: AsyncSession,
        user_id: int
    ) -> list[Match]:
        """
        Get all matches the user takes part in, newest first.

        Ties on ``created_at`` are broken by descending id, which follows
        insertion order.

        Args:
            db: Active database session
            user_id: ID of the user

        Returns:
            List of matches with both users loaded
        """
        try:
            stmt = (
                select(Match)
                .where(or_(Match.user1_id == user_id, Match.user2_id == user_id))
                .order_by(desc(Match.created_at), desc(Match.id))
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching matches for user {user_id}: {e}")
            raise
