# Repositories package
from .base import BaseRepository
from .user_repository import UserRepository
from .swipe_repository import SwipeRepository
from .match_repository import MatchRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SwipeRepository",
    "MatchRepository",
]
