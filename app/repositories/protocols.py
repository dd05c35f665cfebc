"""
Storage contracts consumed by the matching services.

The services only depend on these shapes; ``SwipeRepository``,
``MatchRepository`` and ``UserRepository`` are the SQL implementations, and
the test suite provides in-memory ones. Every method takes the active session
first, matching the repository convention; in-memory implementations ignore it.
"""

from __future__ import annotations
from typing import Any, Optional, Protocol, Sequence

from app.models.match import Match
from app.models.swipe import Swipe
from app.models.user import User


class UserDirectory(Protocol):
    """User lookups plus pair locking. The matching core never creates users."""

    async def exists(self, db: Any, user_id: int) -> bool: ...
    async def get(self, db: Any, user_id: int) -> Optional[User]: ...
    async def resolve_or_fail(self, db: Any, user_id: int) -> User: ...
    async def lock_pair(self, db: Any, user_a_id: int, user_b_id: int) -> list[int]: ...


class SwipeStore(Protocol):
    """Append-only record of directional swipes, unique per (swiper, target)."""

    async def exists(self, db: Any, swiper_id: int, target_id: int) -> bool: ...
    async def record(
        self, db: Any, swiper_id: int, target_id: int, liked: bool,
    ) -> Swipe: ...
    async def find_liked(
        self, db: Any, swiper_id: int, target_id: int,
    ) -> Optional[Swipe]: ...
    async def find_candidates(
        self, db: Any, user_id: int, limit: int, skip: int = 0,
    ) -> Sequence[User]: ...


class MatchStore(Protocol):
    """Append-only record of mutual matches, unique per unordered pair."""

    async def are_matched(self, db: Any, user1_id: int, user2_id: int) -> bool: ...
    async def create(self, db: Any, user1_id: int, user2_id: int) -> Match: ...
    async def find_for_user(self, db: Any, user_id: int) -> Sequence[Match]: ...
