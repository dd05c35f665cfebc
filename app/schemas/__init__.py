from .user import UserProfile
from .swipe import SwipeCreate, SwipeOutcome, SwipeStatus
from .match import Match, MatchView, MatchStatus
from .error import ErrorResponse

__all__ = [
    "UserProfile",
    "SwipeCreate",
    "SwipeOutcome",
    "SwipeStatus",
    "Match",
    "MatchView",
    "MatchStatus",
    "ErrorResponse",
]
