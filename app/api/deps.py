from functools import lru_cache
from app.repositories.user_repository import UserRepository
from app.services.matching_engine import MatchingEngine


@lru_cache
def get_matching_engine() -> MatchingEngine:
    """Shared engine instance; it holds no per-request state."""
    return MatchingEngine()


@lru_cache
def get_user_directory() -> UserRepository:
    return UserRepository()
