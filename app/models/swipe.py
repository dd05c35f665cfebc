from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, UniqueConstraint
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base

SWIPE_PAIR_CONSTRAINT = "uq_swipe_swiper_target"


class Swipe(Base):
    __tablename__ = "swipes"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    swiper_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)  # person who swiped
    target_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)  # person swiped on
    liked = Column(Boolean, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    swiper = relationship("User", foreign_keys=[swiper_id])
    target = relationship("User", foreign_keys=[target_id])

    # One swipe per ordered (swiper, target) pair; swipes are never updated
    __table_args__ = (
        UniqueConstraint("swiper_id", "target_id", name=SWIPE_PAIR_CONSTRAINT),
        CheckConstraint("swiper_id <> target_id", name="ck_swipe_not_self"),
    )

    def __repr__(self):
        return f"<Swipe(swiper_id={self.swiper_id}, target_id={self.target_id}, liked={self.liked})>"
