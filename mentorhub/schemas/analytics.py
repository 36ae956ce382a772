"""Read-only analytics views"""
from typing import Optional

from pydantic import BaseModel


class TaskStats(BaseModel):
    total: int
    completed: int
    in_progress: int
    completion_percentage: float


class TeamStats(BaseModel):
    total_members: int
    active_members: int


class FeedbackStats(BaseModel):
    total_feedback: int
    # 0.0 when total_feedback == 0; real averages are always >= 1.0
    average_rating: float


class EngagementStats(BaseModel):
    total_activities: int
    recent_activities: int


class ProjectAnalytics(BaseModel):
    project_id: str
    task_stats: TaskStats
    team_stats: TeamStats
    feedback_stats: FeedbackStats


class StudentAnalytics(BaseModel):
    user_id: str
    project_id: Optional[str] = None
    task_stats: TaskStats
    feedback_stats: FeedbackStats
    engagement_stats: EngagementStats
