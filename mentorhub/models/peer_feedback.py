"""Peer feedback model"""
from sqlalchemy import CheckConstraint, Column, Integer, String, Text, DateTime, ForeignKey

from mentorhub.database import Base
from mentorhub.utils.clock import utcnow


class PeerFeedback(Base):
    __tablename__ = "peer_feedback"

    id = Column(String(36), primary_key=True, index=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    from_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    to_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, default="", nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_peer_feedback_rating"),
        CheckConstraint("from_user_id <> to_user_id", name="ck_peer_feedback_not_self"),
    )
