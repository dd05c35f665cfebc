from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.api.deps import get_matching_engine
from app.schemas.match import MatchStatus, MatchView
from app.services.matching_engine import MatchingEngine

router = APIRouter()


@router.get("/user/{user_id}", response_model=list[MatchView])
async def get_user_matches(
    user_id: int,
    engine: MatchingEngine = Depends(get_matching_engine),
    db: AsyncSession = Depends(get_db)
):
    """All matches of a user, newest first, showing the other user of each pair"""
    return await engine.get_user_matches(db, user_id)


@router.get("/check", response_model=MatchStatus)
async def check_match(
    user1_id: int,
    user2_id: int,
    engine: MatchingEngine = Depends(get_matching_engine),
    db: AsyncSession = Depends(get_db)
):
    """Whether two users are matched (order of the ids does not matter)"""
    return MatchStatus(
        user1_id=user1_id,
        user2_id=user2_id,
        are_matched=await engine.match_service.are_matched(db, user1_id, user2_id),
    )
