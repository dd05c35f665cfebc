from pydantic import BaseModel
from typing import Optional


class UserProfile(BaseModel):
    """Public view of a user as shown to other users"""
    id: int
    name: str
    bio: Optional[str] = None

    class Config:
        from_attributes = True
