from pydantic import BaseModel
from typing import Optional
from app.schemas.user import UserProfile


class SwipeCreate(BaseModel):
    swiper_id: int
    target_id: int
    liked: bool  # True = like, False = dislike


class SwipeOutcome(BaseModel):
    """Result of recording a swipe"""
    success: bool
    match_created: bool
    next_candidate: Optional[UserProfile] = None  # None when nobody is left to show
    message: str


class SwipeStatus(BaseModel):
    swiper_id: int
    target_id: int
    has_swiped: bool
