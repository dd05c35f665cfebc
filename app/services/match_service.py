"""
Match service: mutual-match detection and match listings.

Match creation is an optimistic check followed by a constrained write. The
``are_matched`` pre-check handles the common case cheaply; the unique
constraint on the unordered pair decides the rare race where two requests
both see "not matched yet". Losing that race is not an error: the pair ends up
with exactly one match either way, so the loser simply reports no new match.

Before reading the two likes the pair is row-locked, so two transactions
recording crossing likes at the same moment run the check one after the
other and the second one sees the first one's swipe.
"""

from __future__ import annotations
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.exceptions import ConstraintViolation, UserNotFound
from app.models.match import Match
from app.repositories.protocols import MatchStore, SwipeStore, UserDirectory
from app.repositories.match_repository import MatchRepository
from app.repositories.swipe_repository import SwipeRepository
from app.repositories.user_repository import UserRepository
from app.schemas.match import MatchView
from app.schemas.user import UserProfile

logger = logging.getLogger(__name__)


class MatchService:
    """
    Service for creating and listing matches.

    Coordinates the match store with the swipe store (to find mutual likes)
    and the user directory (to validate users for listings).
    """

    def __init__(
        self,
        match_repo: Optional[MatchStore] = None,
        swipe_repo: Optional[SwipeStore] = None,
        user_directory: Optional[UserDirectory] = None
    ):
        """
        Initialize service with repositories.

        Args:
            match_repo: Match store (creates MatchRepository if None)
            swipe_repo: Swipe store (creates SwipeRepository if None)
            user_directory: User directory (creates UserRepository if None)
        """
        self.match_repo = match_repo or MatchRepository()
        self.swipe_repo = swipe_repo or SwipeRepository()
        self.user_directory = user_directory or UserRepository()

    async def are_matched(
        self,
        db: AsyncSession,
        user1_id: int,
        user2_id: int
    ) -> bool:
        return await self.match_repo.are_matched(db, user1_id, user2_id)

    async def create_match_if_mutual(
        self,
        db: AsyncSession,
        user_a_id: int,
        user_b_id: int
    ) -> Optional[Match]:
        """
        Create a match if both users like each other and are not matched yet.

        Idempotent: once the pair is matched every further call returns None.

        Args:
            db: Active database session
            user_a_id: ID of one user
            user_b_id: ID of the other user

        Returns:
            The new Match, or None if already matched, not mutual, or another
            request created the match concurrently
        """
        logger.debug(f"Checking for mutual match between users {user_a_id} and {user_b_id}")

        if await self.match_repo.are_matched(db, user_a_id, user_b_id):
            logger.debug(f"Users {user_a_id} and {user_b_id} are already matched")
            return None

        # Serializes crossing likes on the same pair; the later transaction
        # then reads the earlier one's committed swipe.
        await self.user_directory.lock_pair(db, user_a_id, user_b_id)

        a_likes_b = await self.swipe_repo.find_liked(db, user_a_id, user_b_id)
        b_likes_a = await self.swipe_repo.find_liked(db, user_b_id, user_a_id)
        if a_likes_b is None or b_likes_a is None:
            logger.debug(f"No mutual like between users {user_a_id} and {user_b_id}")
            return None

        try:
            match = await self.match_repo.create(db, user_a_id, user_b_id)
        except ConstraintViolation:
            logger.info(
                f"Match between users {user_a_id} and {user_b_id} was created "
                f"concurrently; treating as already matched"
            )
            return None

        logger.info(f"Created match {match.id} between users {user_a_id} and {user_b_id}")
        return match

    async def get_user_matches(
        self,
        db: AsyncSession,
        user_id: int
    ) -> list[MatchView]:
        """
        Get all matches for a user, newest first, seen from that user's side.

        Args:
            db: Active database session
            user_id: ID of the viewing user

        Returns:
            One MatchView per match, with the other user as ``matched_user``

        Raises:
            UserNotFound: If user_id does not exist
        """
        if not await self.user_directory.exists(db, user_id):
            raise UserNotFound(user_id)

        matches = await self.match_repo.find_for_user(db, user_id)
        logger.debug(f"Found {len(matches)} matches for user {user_id}")

        return [
            MatchView(
                match_id=match.id,
                matched_user=UserProfile.model_validate(match.other_user(user_id)),
                matched_at=match.created_at,
            )
            for match in matches
        ]
