"""MentorHub Database Models"""
from mentorhub.models.user import User
from mentorhub.models.project import Project
from mentorhub.models.project_member import ProjectMember
from mentorhub.models.task import Task, TaskStatus
from mentorhub.models.peer_feedback import PeerFeedback
from mentorhub.models.engagement_log import ActionType, EngagementLog
from mentorhub.utils.primary_keys import register_uuid_pk_listener

__all__ = [
    "User",
    "Project",
    "ProjectMember",
    "Task",
    "TaskStatus",
    "PeerFeedback",
    "EngagementLog",
    "ActionType",
]


for _model in (
    User,
    Project,
    ProjectMember,
    Task,
    PeerFeedback,
    EngagementLog,
):
    register_uuid_pk_listener(_model)
