from pydantic import BaseModel
from datetime import datetime
from app.schemas.user import UserProfile


class Match(BaseModel):
    """Stored match record (unordered pair, smaller id first)"""
    id: int
    user1_id: int
    user2_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class MatchView(BaseModel):
    """A match as seen by one of its two users"""
    match_id: int
    matched_user: UserProfile  # the other user, never the viewer
    matched_at: datetime


class MatchStatus(BaseModel):
    user1_id: int
    user2_id: int
    are_matched: bool
