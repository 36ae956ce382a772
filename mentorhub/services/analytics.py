"""Read-only rollups over tasks, membership, feedback and activity.

Everything is computed from current state on each call; nothing is cached.

``average_rating`` is ``0.0`` when there is no feedback. Ratings are limited to
1-5, so a real average is never below ``1.0`` and the sentinel cannot be
confused with one; ``total_feedback`` is reported alongside it so callers can
tell "no feedback yet" apart without relying on the sentinel.
"""
import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

from mentorhub import authorization as authz
from mentorhub.config import settings
from mentorhub.core.exceptions import NotFoundError
from mentorhub.core.identity import Identity, Role
from mentorhub.models.task import TaskStatus
from mentorhub.persistence.port import Entity, Gte, In, PersistencePort
from mentorhub.schemas import (
    EngagementStats,
    FeedbackStats,
    ProjectAnalytics,
    StudentAnalytics,
    TaskStats,
    TeamStats,
)
from mentorhub.services.projects import get_project_or_404
from mentorhub.utils.clock import utcnow

MAX_RATING = 5.0


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def completion_percentage(completed: int, total: int) -> float:
    """Share of completed tasks in percent, one decimal, within [0, 100]."""
    if total <= 0:
        return 0.0
    percentage = _round_half_up(completed / total * 1000) / 10
    return min(100.0, max(0.0, percentage))


def average_rating(ratings: Iterable[int]) -> float:
    """Mean rating to one decimal, capped at 5.0; 0.0 when there are no ratings."""
    ratings = list(ratings)
    if not ratings:
        return 0.0
    raw = sum(ratings) / len(ratings)
    return min(MAX_RATING, max(0.0, _round_half_up(raw * 10) / 10))


def _activity_cutoff(now: Optional[datetime]) -> datetime:
    return (now or utcnow()) - timedelta(days=settings.ACTIVE_MEMBER_WINDOW_DAYS)


def _task_stats(store: PersistencePort, filters: dict) -> TaskStats:
    total = store.count(Entity.TASK, filters)
    completed = store.count(Entity.TASK, {**filters, "status": TaskStatus.DONE})
    in_progress = store.count(Entity.TASK, {**filters, "status": TaskStatus.IN_PROGRESS})
    return TaskStats(
        total=total,
        completed=completed,
        in_progress=in_progress,
        completion_percentage=completion_percentage(completed, total),
    )


def _feedback_stats(store: PersistencePort, filters: dict) -> FeedbackStats:
    ratings = [feedback.rating for feedback in store.find(Entity.PEER_FEEDBACK, filters)]
    return FeedbackStats(total_feedback=len(ratings), average_rating=average_rating(ratings))


def project_analytics(
    store: PersistencePort, identity: Identity, project_id: str, now: Optional[datetime] = None
) -> ProjectAnalytics:
    """Task, team and feedback rollups for a project the caller owns."""
    project = get_project_or_404(store, project_id)
    authz.can_view_project_analytics(identity, project).enforce()

    member_ids = {member.user_id for member in store.find(Entity.PROJECT_MEMBER, {"project_id": project.id})}
    # Only current members can count as active, whatever the log says about past ones
    recent = store.find(
        Entity.ENGAGEMENT_LOG,
        {"user_id": In(member_ids), "timestamp": Gte(_activity_cutoff(now))},
    )
    active_members = len(member_ids & {log.user_id for log in recent})

    return ProjectAnalytics(
        project_id=project.id,
        task_stats=_task_stats(store, {"project_id": project.id}),
        team_stats=TeamStats(total_members=len(member_ids), active_members=active_members),
        feedback_stats=_feedback_stats(store, {"project_id": project.id}),
    )


def student_analytics(
    store: PersistencePort,
    identity: Identity,
    user_id: str,
    project_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> StudentAnalytics:
    """Assigned-task, received-feedback and activity rollups for one student.

    With ``project_id`` the task and feedback figures are limited to that
    project; activity figures always cover the student's whole trail.
    """
    student = store.get(Entity.USER, user_id)
    if student is None:
        raise NotFoundError("User not found")
    if student.role != Role.STUDENT:
        raise NotFoundError("Analytics are only available for students")

    lookup = authz.StoreMembershipLookup(store)
    authz.can_view_student_analytics(identity, student.id, lookup).enforce()

    task_filters = {"assigned_to_id": student.id}
    feedback_filters = {"to_user_id": student.id}
    if project_id is not None:
        project = get_project_or_404(store, project_id)
        authz.can_read_project(identity, project, lookup).enforce()
        task_filters["project_id"] = project.id
        feedback_filters["project_id"] = project.id

    return StudentAnalytics(
        user_id=student.id,
        project_id=project_id,
        task_stats=_task_stats(store, task_filters),
        feedback_stats=_feedback_stats(store, feedback_filters),
        engagement_stats=EngagementStats(
            total_activities=store.count(Entity.ENGAGEMENT_LOG, {"user_id": student.id}),
            recent_activities=store.count(
                Entity.ENGAGEMENT_LOG,
                {"user_id": student.id, "timestamp": Gte(_activity_cutoff(now))},
            ),
        ),
    )
