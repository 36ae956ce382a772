"""Membership lifecycle"""
import logging
from typing import Any, Dict, Union

from mentorhub import authorization as authz
from mentorhub.core.exceptions import ConflictError, NotFoundError
from mentorhub.core.identity import Identity
from mentorhub.models.engagement_log import ActionType
from mentorhub.persistence.port import Entity, PersistencePort
from mentorhub.schemas import MemberAdd, ProjectMemberRead, UserRead
from mentorhub.services.activity import record_activity
from mentorhub.services.base import parse_input
from mentorhub.services.projects import get_project_or_404

logger = logging.getLogger(__name__)


def _resolve_target(store: PersistencePort, target: MemberAdd) -> UserRead:
    if target.user_id:
        user = store.get(Entity.USER, target.user_id)
    else:
        user = store.find_one(Entity.USER, {"email": target.email.lower()})
    if user is None:
        raise NotFoundError("User not found")
    return user


def add_member(
    store: PersistencePort,
    identity: Identity,
    project_id: str,
    target: Union[str, MemberAdd, Dict[str, Any]],
) -> ProjectMemberRead:
    """Add a user, named by id or email, to a project the caller owns."""
    project = get_project_or_404(store, project_id)
    authz.can_manage_members(identity, project).enforce()

    if isinstance(target, str):
        target = MemberAdd(user_id=target)
    user = _resolve_target(store, parse_input(MemberAdd, target))

    if store.exists(Entity.PROJECT_MEMBER, {"user_id": user.id, "project_id": project.id}):
        raise ConflictError("User is already a member of this project")

    # A concurrent duplicate insert surfaces as ConflictError from the adapter
    member = store.create(Entity.PROJECT_MEMBER, {"user_id": user.id, "project_id": project.id})
    logger.info(f"User {user.id} added to project {project.id}")
    record_activity(store, identity.user_id, ActionType.MEMBER_ADDED, f"Added member {user.id} to project {project.id}")
    return member


def remove_member(store: PersistencePort, identity: Identity, project_id: str, user_id: str) -> ProjectMemberRead:
    """Remove a member and unassign their tasks in that project.

    The unassignment and the membership delete share one transaction, so no
    task is ever left assigned to a non-member. The activity entry is written
    after the commit.
    """
    project = get_project_or_404(store, project_id)
    authz.can_remove_member(identity, project, user_id).enforce()

    membership = store.find_one(Entity.PROJECT_MEMBER, {"user_id": user_id, "project_id": project.id})
    if membership is None:
        raise NotFoundError("User is not a member of this project")

    with store.transaction() as tx:
        unassigned = tx.update_many(
            Entity.TASK,
            {"project_id": project.id, "assigned_to_id": user_id},
            {"assigned_to_id": None},
        )
        tx.delete(Entity.PROJECT_MEMBER, {"id": membership.id})

    logger.info(f"User {user_id} removed from project {project.id}, {unassigned} tasks unassigned")
    record_activity(
        store, identity.user_id, ActionType.MEMBER_REMOVED, f"Removed member {user_id} from project {project.id}"
    )
    return membership
