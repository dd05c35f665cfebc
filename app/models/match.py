from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base

MATCH_PAIR_CONSTRAINT = "uq_match_user1_user2"


class Match(Base):
    """
    Confirmed mutual match between two users.

    The pair is unordered: rows are always written with ``user1_id < user2_id``
    so the unique constraint covers both orderings. Matches do not reference
    the swipes that produced them.
    """

    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    user1_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    user2_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    user1 = relationship("User", foreign_keys=[user1_id], lazy="joined")
    user2 = relationship("User", foreign_keys=[user2_id], lazy="joined")

    __table_args__ = (
        UniqueConstraint("user1_id", "user2_id", name=MATCH_PAIR_CONSTRAINT),
        CheckConstraint("user1_id < user2_id", name="ck_match_canonical_order"),
    )

    def other_user_id(self, user_id: int) -> int:
        return self.user2_id if self.user1_id == user_id else self.user1_id

    def other_user(self, user_id: int):
        return self.user2 if self.user1_id == user_id else self.user1

    def __repr__(self):
        return f"<Match(id={self.id}, user1_id={self.user1_id}, user2_id={self.user2_id})>"
