"""
Project Member Model
"""
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, String

from mentorhub.database import Base
from mentorhub.utils.clock import utcnow


class ProjectMember(Base):
    __tablename__ = "project_members"

    id = Column(String(36), primary_key=True, index=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    joined_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'project_id', name='unique_project_member'),
    )
