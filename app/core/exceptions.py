"""
Domain error hierarchy for the matching engine.

Every error carries a stable ``code`` and the HTTP status the API layer maps
it to. ``ConstraintViolation`` is raised by repositories when the database
rejects a write on a uniqueness constraint; services translate it and it is
never meant to reach a client.
"""

from __future__ import annotations
from typing import Any, Optional


class MatchingError(Exception):
    """Base class for all matching engine errors."""

    code: str = "MATCHING_ERROR"
    http_status: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserNotFound(MatchingError):
    """A referenced user does not exist in the user directory."""

    code = "USER_NOT_FOUND"
    http_status = 404

    def __init__(self, user_id: Any):
        super().__init__(f"User not found with ID: {user_id}")
        self.user_id = user_id


class InvalidOperation(MatchingError):
    """Request rejected before touching storage (self-swipe, missing ids)."""

    code = "INVALID_OPERATION"
    http_status = 400

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class DuplicateSwipe(MatchingError):
    """A swipe for this ordered (swiper, target) pair already exists."""

    code = "DUPLICATE_SWIPE"
    http_status = 409

    def __init__(self, swiper_id: Any, target_id: Any):
        super().__init__(
            f"User {swiper_id} has already swiped on user {target_id}"
        )
        self.swiper_id = swiper_id
        self.target_id = target_id


class ConstraintViolation(MatchingError):
    """Raw storage-layer uniqueness failure."""

    code = "CONSTRAINT_VIOLATION"
    http_status = 500

    def __init__(self, constraint: str, detail: Optional[str] = None):
        message = f"Uniqueness constraint violated: {constraint}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.constraint = constraint
