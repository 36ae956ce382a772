"""Engagement log model, an append-only activity trail"""
import enum

from sqlalchemy import Column, String, Text, DateTime

from mentorhub.database import Base
from mentorhub.utils.clock import utcnow


class ActionType(str, enum.Enum):
    LOGIN = "login"
    VIEW_DASHBOARD = "view-dashboard"
    CREATE_PROJECT = "create-project"
    PROJECT_DELETED = "project-deleted"
    MEMBER_ADDED = "member-added"
    MEMBER_REMOVED = "member-removed"
    TASK_UPDATE = "task-update"
    FEEDBACK_GIVEN = "feedback-given"


class EngagementLog(Base):
    __tablename__ = "engagement_logs"

    id = Column(String(36), primary_key=True, index=True)
    # Soft reference: log rows may outlive or predate the user row
    user_id = Column(String(36), nullable=False, index=True)
    action_type = Column(String(50), nullable=False)
    details = Column(Text, nullable=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)
