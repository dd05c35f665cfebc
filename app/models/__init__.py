from .user import User
from .swipe import Swipe
from .match import Match

__all__ = ["User", "Swipe", "Match"]
