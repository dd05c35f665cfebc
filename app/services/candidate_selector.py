"""
Candidate selection: which user to show next.

This is a plain exclusion filter, not a ranking. A user's candidates are every
other user they have not swiped on yet, in ascending id order, so the answer is
stable until the user swipes on the current candidate.
"""

from __future__ import annotations
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.models.user import User
from app.repositories.protocols import SwipeStore, UserDirectory
from app.repositories.swipe_repository import SwipeRepository
from app.repositories.user_repository import UserRepository
from app.core.exceptions import UserNotFound

logger = logging.getLogger(__name__)


class CandidateSelector:
    """Selects unvisited candidates for a user."""

    def __init__(
        self,
        swipe_repo: Optional[SwipeStore] = None,
        user_directory: Optional[UserDirectory] = None
    ):
        """
        Initialize selector with repositories.

        Args:
            swipe_repo: Swipe store (creates SwipeRepository if None)
            user_directory: User directory (creates UserRepository if None)
        """
        self.swipe_repo = swipe_repo or SwipeRepository()
        self.user_directory = user_directory or UserRepository()

    async def _ensure_user(self, db: AsyncSession, user_id: int) -> None:
        if not await self.user_directory.exists(db, user_id):
            raise UserNotFound(user_id)

    async def next(
        self,
        db: AsyncSession,
        user_id: int
    ) -> Optional[User]:
        """
        Get the next candidate for a user.

        Args:
            db: Active database session
            user_id: ID of the user looking for candidates

        Returns:
            The first unvisited user, or None when the user has swiped on everyone

        Raises:
            UserNotFound: If user_id does not exist
        """
        await self._ensure_user(db, user_id)

        candidates = await self.swipe_repo.find_candidates(db, user_id, limit=1)
        if not candidates:
            logger.debug(f"No potential matches found for user {user_id}")
            return None

        candidate = candidates[0]
        logger.debug(f"Next candidate for user {user_id}: {candidate.id}")
        return candidate

    async def page(
        self,
        db: AsyncSession,
        user_id: int,
        limit: int,
        skip: int = 0
    ) -> list[User]:
        """
        Get a page of candidates using the same exclusion rule as ``next``.

        Raises:
            UserNotFound: If user_id does not exist
        """
        await self._ensure_user(db, user_id)
        return list(await self.swipe_repo.find_candidates(db, user_id, limit=limit, skip=skip))
