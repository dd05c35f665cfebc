"""
Swipe repository for recording swipes and selecting unvisited candidates.

Swipes are append-only: a row is written once per ordered (swiper, target)
pair and never updated or deleted. The unique constraint on that pair is the
final arbiter when identical swipes race.
"""

from __future__ import annotations
from typing import Optional
from sqlalchemy import select, and_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.swipe import Swipe, SWIPE_PAIR_CONSTRAINT
from app.models.user import User
from .base import BaseRepository

logger = logging.getLogger(__name__)


class SwipeRepository(BaseRepository[Swipe]):
    """
    Repository for Swipe model.

    Provides methods for:
    - Checking whether a user already swiped on a target
    - Recording a swipe (constraint-backed uniqueness)
    - Looking up a positive swipe for mutual-match detection
    - Listing candidates the user has not swiped on yet
    """

    def __init__(self):
        """Initialize with Swipe model."""
        super().__init__(Swipe)

    async def exists(
        self,
        db: AsyncSession,
        swiper_id: int,
        target_id: int
    ) -> bool:
        """
        Check whether a swipe already exists for the ordered pair.

        Args:
            db: Active database session
            swiper_id: ID of the user who swipes
            target_id: ID of the user being swiped on

        Returns:
            True if a swipe from swiper to target exists, regardless of ``liked``
        """
        try:
            stmt = select(func.count(Swipe.id)).where(
                and_(
                    Swipe.swiper_id == swiper_id,
                    Swipe.target_id == target_id
                )
            )
            result = await db.execute(stmt)
            return result.scalar_one() > 0

        except SQLAlchemyError as e:
            logger.error(f"Error checking swipe {swiper_id} -> {target_id}: {e}")
            raise

    async def record(
        self,
        db: AsyncSession,
        swiper_id: int,
        target_id: int,
        liked: bool
    ) -> Swipe:
        """
        Persist a new swipe.

        Args:
            db: Active database session
            swiper_id: ID of the user who swipes
            target_id: ID of the user being swiped on
            liked: True for a like, False for a dislike

        Returns:
            The flushed Swipe row

        Raises:
            ConstraintViolation: If a swipe for (swiper_id, target_id) already exists

        Example:
            swipe = await repo.record(db, swiper_id=1, target_id=2, liked=True)
            await db.commit()
        """
        return await self.create(
            db,
            {"swiper_id": swiper_id, "target_id": target_id, "liked": liked},
            constraint=SWIPE_PAIR_CONSTRAINT,
        )

    async def find_liked(
        self,
        db: AsyncSession,
        swiper_id: int,
        target_id: int
    ) -> Optional[Swipe]:
        """
        Get the swipe from swiper to target only if it is a like.

        Args:
            db: Active database session
            swiper_id: ID of the user who swiped
            target_id: ID of the user swiped on

        Returns:
            The liked Swipe, or None if absent or a dislike
        """
        try:
            stmt = select(Swipe).where(
                and_(
                    Swipe.swiper_id == swiper_id,
                    Swipe.target_id == target_id,
                    Swipe.liked.is_(True)
                )
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            logger.error(f"Error fetching like {swiper_id} -> {target_id}: {e}")
            raise

    async def find_candidates(
        self,
        db: AsyncSession,
        user_id: int,
        limit: int,
        skip: int = 0
    ) -> list[User]:
        """
        List users that ``user_id`` has not swiped on yet.

        Excludes the user themselves and every target of the user's outgoing
        swipes. Incoming swipes do not exclude anyone. Ordered by ascending
        user id so repeated calls are stable.

        Args:
            db: Active database session
            user_id: ID of the user looking for candidates
            limit: Maximum number of users to return
            skip: Number of candidates to skip (offset)

        Returns:
            List of candidate users
        """
        try:
            swiped_targets = select(Swipe.target_id).where(Swipe.swiper_id == user_id)
            stmt = (
                select(User)
                .where(
                    and_(
                        User.id != user_id,
                        User.id.not_in(swiped_targets)
                    )
                )
                .order_by(User.id.asc())
                .offset(skip)
                .limit(limit)
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching candidates for user {user_id}: {e}")
            raise
