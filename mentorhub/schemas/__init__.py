"""
Pydantic schemas for records, requests and derived views
"""
from mentorhub.schemas.user import UserCreate, UserRead, UserSummary
from mentorhub.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from mentorhub.schemas.project_member import MemberAdd, ProjectMemberRead, ProjectMemberResponse
from mentorhub.schemas.task import TaskCreate, TaskRead, TaskUpdate
from mentorhub.schemas.feedback import FeedbackCreate, PeerFeedbackRead
from mentorhub.schemas.engagement import EngagementLogCreate, EngagementLogRead
from mentorhub.schemas.analytics import (
    EngagementStats,
    FeedbackStats,
    ProjectAnalytics,
    StudentAnalytics,
    TaskStats,
    TeamStats,
)

__all__ = [
    "UserCreate",
    "UserRead",
    "UserSummary",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "MemberAdd",
    "ProjectMemberRead",
    "ProjectMemberResponse",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "FeedbackCreate",
    "PeerFeedbackRead",
    "EngagementLogCreate",
    "EngagementLogRead",
    "TaskStats",
    "TeamStats",
    "FeedbackStats",
    "EngagementStats",
    "ProjectAnalytics",
    "StudentAnalytics",
]
