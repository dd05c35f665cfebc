"""
Matching engine: the single entry point for swipe handling.

``record_swipe`` runs as one transaction:

1. validate ids (no storage access on failure)
2. reject a swipe already on record (fast pre-check)
3. insert the swipe; the (swiper, target) unique constraint rejects a
   concurrent identical insert, reported as ``DuplicateSwipe``
4. on a like, create the match if the like is mutual
5. look up the next candidate, which now excludes the target
6. commit

The pre-checks are optimistic and only save work. Correctness under
concurrent callers, including callers in other processes, rests on the
database constraints on swipes and matches.
"""

from __future__ import annotations
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.exceptions import (
    ConstraintViolation,
    DuplicateSwipe,
    InvalidOperation,
)
from app.models.user import User
from app.repositories.protocols import SwipeStore, UserDirectory
from app.repositories.swipe_repository import SwipeRepository
from app.repositories.user_repository import UserRepository
from app.schemas.match import Match as MatchRecord, MatchView
from app.schemas.swipe import SwipeOutcome
from app.schemas.user import UserProfile
from app.services.candidate_selector import CandidateSelector
from app.services.match_service import MatchService

logger = logging.getLogger(__name__)

SWIPE_RECORDED_MESSAGE = "Swipe recorded successfully"
NO_MORE_CANDIDATES_MESSAGE = "Swipe recorded successfully. No more potential matches available"


class MatchingEngine:
    """
    Orchestrates swipe recording, mutual-match creation and candidate lookup.

    All collaborators are injected; the defaults are the SQL repositories.
    """

    def __init__(
        self,
        swipe_repo: Optional[SwipeStore] = None,
        user_directory: Optional[UserDirectory] = None,
        match_service: Optional[MatchService] = None,
        candidate_selector: Optional[CandidateSelector] = None
    ):
        """
        Initialize engine with its collaborators.

        Args:
            swipe_repo: Swipe store (creates SwipeRepository if None)
            user_directory: User directory (creates UserRepository if None)
            match_service: MatchService (built from the same stores if None)
            candidate_selector: CandidateSelector (built from the same stores if None)
        """
        self.swipe_repo = swipe_repo or SwipeRepository()
        self.user_directory = user_directory or UserRepository()
        self.match_service = match_service or MatchService(
            swipe_repo=self.swipe_repo,
            user_directory=self.user_directory,
        )
        self.candidate_selector = candidate_selector or CandidateSelector(
            swipe_repo=self.swipe_repo,
            user_directory=self.user_directory,
        )

    async def record_swipe(
        self,
        db: AsyncSession,
        swiper_id: Optional[int],
        target_id: Optional[int],
        liked: bool
    ) -> SwipeOutcome:
        """
        Record a like or dislike and report whether it produced a match.

        Args:
            db: Active database session
            swiper_id: ID of the user who swipes
            target_id: ID of the user being swiped on
            liked: True for a like, False for a dislike

        Returns:
            SwipeOutcome with ``match_created`` and the swiper's next candidate

        Raises:
            InvalidOperation: Missing ids or a self-swipe
            UserNotFound: Either user does not exist
            DuplicateSwipe: The swiper already swiped on the target

        Example:
            outcome = await engine.record_swipe(db, swiper_id=1, target_id=2, liked=True)
            if outcome.match_created:
                notify(...)
        """
        logger.debug(f"Recording swipe: swiper={swiper_id}, target={target_id}, liked={liked}")

        self._validate_swipe_input(swiper_id, target_id)
        await self.user_directory.resolve_or_fail(db, swiper_id)
        await self.user_directory.resolve_or_fail(db, target_id)

        if await self.swipe_repo.exists(db, swiper_id, target_id):
            raise DuplicateSwipe(swiper_id, target_id)

        try:
            await self.swipe_repo.record(db, swiper_id, target_id, liked)
        except ConstraintViolation as e:
            logger.warning(
                f"Concurrent duplicate swipe {swiper_id} -> {target_id} rejected by storage: {e}"
            )
            raise DuplicateSwipe(swiper_id, target_id) from e

        try:
            match_created = False
            if liked:
                match = await self.match_service.create_match_if_mutual(db, swiper_id, target_id)
                match_created = match is not None

            next_candidate = await self.candidate_selector.next(db, swiper_id)
            outcome = SwipeOutcome(
                success=True,
                match_created=match_created,
                next_candidate=(
                    UserProfile.model_validate(next_candidate) if next_candidate else None
                ),
                message=SWIPE_RECORDED_MESSAGE if next_candidate else NO_MORE_CANDIDATES_MESSAGE,
            )
            await db.commit()
        except Exception:
            logger.error(f"Error completing swipe {swiper_id} -> {target_id}", exc_info=True)
            await db.rollback()
            raise

        logger.info(
            f"Swipe recorded: swiper={swiper_id}, target={target_id}, "
            f"liked={liked}, match_created={match_created}"
        )

        return outcome

    async def create_match_if_mutual(
        self,
        db: AsyncSession,
        user_a_id: int,
        user_b_id: int
    ) -> Optional[MatchRecord]:
        """
        Create and commit a match if the like is mutual; None otherwise.

        Raises:
            UserNotFound: Either user does not exist
        """
        await self.user_directory.resolve_or_fail(db, user_a_id)
        await self.user_directory.resolve_or_fail(db, user_b_id)

        try:
            match = await self.match_service.create_match_if_mutual(db, user_a_id, user_b_id)
            record = MatchRecord.model_validate(match) if match is not None else None
            await db.commit()
        except Exception:
            logger.error(
                f"Error creating match between users {user_a_id} and {user_b_id}", exc_info=True
            )
            await db.rollback()
            raise

        return record

    async def get_user_matches(self, db: AsyncSession, user_id: int) -> list[MatchView]:
        return await self.match_service.get_user_matches(db, user_id)

    async def next_candidate(self, db: AsyncSession, user_id: int) -> Optional[User]:
        return await self.candidate_selector.next(db, user_id)

    async def has_swiped(self, db: AsyncSession, swiper_id: int, target_id: int) -> bool:
        return await self.swipe_repo.exists(db, swiper_id, target_id)

    @staticmethod
    def _validate_swipe_input(swiper_id: Optional[int], target_id: Optional[int]) -> None:
        if swiper_id is None:
            raise InvalidOperation("Swiper ID cannot be null")
        if target_id is None:
            raise InvalidOperation("Target ID cannot be null")
        if swiper_id == target_id:
            raise InvalidOperation("User cannot swipe on themselves")
