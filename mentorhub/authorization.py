"""Authorization engine.

Every rule is a pure function of the caller's identity, the target record and
a ``MembershipLookup`` that answers membership and ownership questions. The
functions never write and never cache: callers pass a lookup bound to current
state on each request, since membership can change between requests.

Rules return a ``Decision``; ``Decision.enforce()`` raises the matching error.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Type

from mentorhub.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    InvalidRoleError,
    MentorHubError,
)
from mentorhub.core.identity import Identity
from mentorhub.persistence.port import Entity, Filters, In, PersistencePort
from mentorhub.schemas import ProjectRead, TaskRead

STUDENT_TASK_FIELDS = frozenset({"status"})


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""
    error: Type[MentorHubError] = ForbiddenError

    def enforce(self) -> None:
        if not self.allowed:
            raise self.error(self.reason)


ALLOW = Decision(True)


def deny(reason: str, error: Type[MentorHubError] = ForbiddenError) -> Decision:
    return Decision(False, reason, error)


INVALID_ROLE = deny("Invalid user role", InvalidRoleError)


class MembershipLookup(Protocol):
    def is_member(self, user_id: str, project_id: str) -> bool: ...

    def member_project_ids(self, user_id: str) -> List[str]: ...

    def owned_project_ids(self, user_id: str) -> List[str]: ...


class StoreMembershipLookup:
    """Answers lookups by querying the persistence port on every call."""

    def __init__(self, store: PersistencePort):
        self.store = store

    def is_member(self, user_id: str, project_id: str) -> bool:
        return self.store.exists(Entity.PROJECT_MEMBER, {"user_id": user_id, "project_id": project_id})

    def member_project_ids(self, user_id: str) -> List[str]:
        return [m.project_id for m in self.store.find(Entity.PROJECT_MEMBER, {"user_id": user_id})]

    def owned_project_ids(self, user_id: str) -> List[str]:
        return [p.id for p in self.store.find(Entity.PROJECT, {"mentor_id": user_id})]


def _owns(identity: Identity, project: ProjectRead) -> bool:
    return identity.is_mentor and project.mentor_id == identity.user_id


# Projects

def can_read_project(identity: Identity, project: ProjectRead, lookup: MembershipLookup) -> Decision:
    if identity.is_mentor:
        if project.mentor_id == identity.user_id:
            return ALLOW
        return deny("Access denied: You can only view your own projects")
    if identity.is_student:
        if lookup.is_member(identity.user_id, project.id):
            return ALLOW
        return deny("Access denied: You are not a member of this project")
    return INVALID_ROLE


def can_manage_project(identity: Identity, project: ProjectRead) -> Decision:
    """Update and delete: owning mentor only."""
    if not identity.has_valid_role:
        return INVALID_ROLE
    if not identity.is_mentor:
        return deny("Only mentors can modify projects")
    if project.mentor_id != identity.user_id:
        return deny("Access denied: You can only modify your own projects")
    return ALLOW


def can_create_project(identity: Identity) -> Decision:
    if not identity.has_valid_role:
        return INVALID_ROLE
    if not identity.is_mentor:
        return deny("Only mentors can create projects")
    return ALLOW


def project_list_filters(identity: Identity, lookup: MembershipLookup) -> List[Filters]:
    """Filters selecting the projects ``identity`` may list; results are unioned."""
    if identity.is_mentor:
        return [{"mentor_id": identity.user_id}]
    if identity.is_student:
        return [{"id": In(lookup.member_project_ids(identity.user_id))}]
    raise InvalidRoleError()


# Membership

def can_manage_members(identity: Identity, project: ProjectRead) -> Decision:
    if not identity.has_valid_role:
        return INVALID_ROLE
    if not identity.is_mentor:
        return deny("Only mentors can manage project members")
    if project.mentor_id != identity.user_id:
        return deny("Forbidden: You can only manage members of your own projects")
    return ALLOW


def can_remove_member(identity: Identity, project: ProjectRead, target_user_id: str) -> Decision:
    decision = can_manage_members(identity, project)
    if not decision.allowed:
        return decision
    if target_user_id == identity.user_id:
        return deny("Mentors cannot remove themselves from their own projects", ConflictError)
    return ALLOW


# Tasks

def can_manage_tasks(identity: Identity, project: ProjectRead) -> Decision:
    """Create, delete and reassign: owning mentor only."""
    if not identity.has_valid_role:
        return INVALID_ROLE
    if not identity.is_mentor:
        return deny("Only mentors can manage tasks")
    if project.mentor_id != identity.user_id:
        return deny("Access denied: You can only manage tasks in your own projects")
    return ALLOW


def can_read_task(identity: Identity, task: TaskRead, project: ProjectRead) -> Decision:
    if identity.is_mentor:
        return ALLOW if _owns(identity, project) else deny("Forbidden: You are not allowed to view this task")
    if identity.is_student:
        if task.assigned_to_id == identity.user_id:
            return ALLOW
        return deny("Forbidden: You are not allowed to view this task")
    return INVALID_ROLE


def can_update_task(identity: Identity, task: TaskRead, project: ProjectRead, fields: Iterable[str]) -> Decision:
    """Owning mentor may change any field; the assignee may change only the status."""
    if identity.is_mentor:
        return ALLOW if _owns(identity, project) else deny("Forbidden: You are not allowed to update this task")
    if not identity.is_student:
        return INVALID_ROLE
    if task.assigned_to_id != identity.user_id:
        return deny("Forbidden: You are not allowed to update this task")
    if "assigned_to_id" in fields:
        return deny("Only mentors can reassign tasks")
    restricted = set(fields) - STUDENT_TASK_FIELDS
    if restricted:
        return deny(f"Students may only update task status, not: {', '.join(sorted(restricted))}")
    return ALLOW


def task_list_filters(identity: Identity, project: Optional[ProjectRead]) -> List[Filters]:
    if identity.is_mentor:
        if project is None:
            raise InvalidInputError("project_id is required")
        can_manage_tasks(identity, project).enforce()
        return [{"project_id": project.id}]
    if identity.is_student:
        filters: Filters = {"assigned_to_id": identity.user_id}
        if project is not None:
            filters["project_id"] = project.id
        return [filters]
    raise InvalidRoleError()


# Feedback

def can_submit_feedback(
    identity: Identity, project: ProjectRead, to_user_id: str, lookup: MembershipLookup
) -> Decision:
    if not identity.has_valid_role:
        return INVALID_ROLE
    if identity.user_id == to_user_id:
        return deny("You cannot give feedback to yourself", InvalidInputError)
    # Both sides are checked independently
    if not lookup.is_member(identity.user_id, project.id):
        return deny("You are not a member of this project")
    if not lookup.is_member(to_user_id, project.id):
        return deny("Feedback recipient is not a member of this project")
    return ALLOW


def feedback_list_filters(identity: Identity, lookup: MembershipLookup) -> List[Filters]:
    if identity.is_mentor:
        return [{"project_id": In(lookup.owned_project_ids(identity.user_id))}]
    if identity.is_student:
        return [{"from_user_id": identity.user_id}, {"to_user_id": identity.user_id}]
    raise InvalidRoleError()


# Analytics

def can_view_project_analytics(identity: Identity, project: ProjectRead) -> Decision:
    if not identity.has_valid_role:
        return INVALID_ROLE
    if not identity.is_mentor:
        return deny("Forbidden: Only mentors can view project analytics")
    if project.mentor_id != identity.user_id:
        return deny("Forbidden: You can only view analytics for your own projects")
    return ALLOW


def can_view_student_analytics(identity: Identity, student_id: str, lookup: MembershipLookup) -> Decision:
    if identity.is_student:
        if identity.user_id == student_id:
            return ALLOW
        return deny("Forbidden: You do not have access to this student's analytics")
    if identity.is_mentor:
        shared = set(lookup.owned_project_ids(identity.user_id)) & set(lookup.member_project_ids(student_id))
        if shared:
            return ALLOW
        return deny("Forbidden: You do not have access to this student's analytics")
    return INVALID_ROLE
