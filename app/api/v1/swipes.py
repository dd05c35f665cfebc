from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.config import settings
from app.core.database import get_db
from app.api.deps import get_matching_engine
from app.api.error_handlers import error_response
from app.schemas.swipe import SwipeCreate, SwipeOutcome, SwipeStatus
from app.schemas.user import UserProfile
from app.services.matching_engine import MatchingEngine

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=SwipeOutcome)
async def record_swipe(
    swipe_data: SwipeCreate,
    engine: MatchingEngine = Depends(get_matching_engine),
    db: AsyncSession = Depends(get_db)
):
    """Record a like or dislike; reports whether it created a match"""
    logger.info(
        f"Recording swipe: swiper={swipe_data.swiper_id}, "
        f"target={swipe_data.target_id}, liked={swipe_data.liked}"
    )
    return await engine.record_swipe(
        db, swipe_data.swiper_id, swipe_data.target_id, swipe_data.liked
    )


@router.get(
    "/potential/{user_id}",
    response_model=UserProfile,
    responses={404: {"description": "User not found or no potential matches left"}},
)
async def get_next_potential_match(
    user_id: int,
    engine: MatchingEngine = Depends(get_matching_engine),
    db: AsyncSession = Depends(get_db)
):
    """Next user this user has not swiped on yet"""
    candidate = await engine.next_candidate(db, user_id)
    if candidate is None:
        logger.info(f"No potential matches available for user {user_id}")
        return error_response(
            404, "NO_POTENTIAL_MATCH", f"No potential matches available for user {user_id}"
        )
    return candidate


@router.get("/candidates/{user_id}", response_model=list[UserProfile])
async def list_candidates(
    user_id: int,
    limit: int = Query(default=settings.candidate_page_size, ge=1, le=settings.candidate_page_max),
    skip: int = Query(default=0, ge=0),
    engine: MatchingEngine = Depends(get_matching_engine),
    db: AsyncSession = Depends(get_db)
):
    """Page of users this user has not swiped on yet, ascending id order"""
    return await engine.candidate_selector.page(db, user_id, limit=limit, skip=skip)


@router.get("/status", response_model=SwipeStatus)
async def get_swipe_status(
    swiper_id: int,
    target_id: int,
    engine: MatchingEngine = Depends(get_matching_engine),
    db: AsyncSession = Depends(get_db)
):
    """Whether swiper has already swiped on target"""
    return SwipeStatus(
        swiper_id=swiper_id,
        target_id=target_id,
        has_swiped=await engine.has_swiped(db, swiper_id, target_id),
    )
