"""
Project Model
"""
from sqlalchemy import Column, String, DateTime, ForeignKey

from mentorhub.database import Base
from mentorhub.utils.clock import utcnow


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    mentor_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
