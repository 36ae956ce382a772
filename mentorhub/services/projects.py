"""Project lifecycle: bootstrap, read, rename and cascading delete."""
import logging
from typing import Any, Dict, List, Union

from mentorhub import authorization as authz
from mentorhub.core.identity import Identity
from mentorhub.models.engagement_log import ActionType
from mentorhub.persistence.port import Entity, In, PersistencePort
from mentorhub.schemas import ProjectCreate, ProjectMemberResponse, ProjectRead, ProjectUpdate, UserSummary
from mentorhub.services.activity import record_activity
from mentorhub.services.base import find_any, get_or_404, parse_input

logger = logging.getLogger(__name__)


def get_project_or_404(store: PersistencePort, project_id: str) -> ProjectRead:
    return get_or_404(store, Entity.PROJECT, project_id, "Project")


def create_project(
    store: PersistencePort, identity: Identity, data: Union[ProjectCreate, Dict[str, Any]]
) -> ProjectRead:
    """Create a project and enrol its mentor as the first member, atomically."""
    authz.can_create_project(identity).enforce()
    project_in = parse_input(ProjectCreate, data)

    def _bootstrap(tx: PersistencePort) -> ProjectRead:
        project = tx.create(Entity.PROJECT, {"title": project_in.title, "mentor_id": identity.user_id})
        tx.create(Entity.PROJECT_MEMBER, {"user_id": identity.user_id, "project_id": project.id})
        return project

    project = store.with_transaction(_bootstrap)
    logger.info(f"Project {project.id} created by mentor {identity.user_id}")
    record_activity(store, identity.user_id, ActionType.CREATE_PROJECT, f"Created project: {project.title}")
    return project


def get_project(store: PersistencePort, identity: Identity, project_id: str) -> ProjectRead:
    project = get_project_or_404(store, project_id)
    authz.can_read_project(identity, project, authz.StoreMembershipLookup(store)).enforce()
    return project


def list_projects(store: PersistencePort, identity: Identity) -> List[ProjectRead]:
    """Projects the caller owns (mentor) or belongs to (student), newest first."""
    filters = authz.project_list_filters(identity, authz.StoreMembershipLookup(store))
    return find_any(store, Entity.PROJECT, filters, order_by="-created_at")


def update_project(
    store: PersistencePort, identity: Identity, project_id: str, data: Union[ProjectUpdate, Dict[str, Any]]
) -> ProjectRead:
    project = get_project_or_404(store, project_id)
    authz.can_manage_project(identity, project).enforce()
    project_in = parse_input(ProjectUpdate, data)
    return store.update(Entity.PROJECT, project.id, {"title": project_in.title})


def delete_project(store: PersistencePort, identity: Identity, project_id: str) -> None:
    """Delete a project together with its members, tasks and feedback.

    All four deletes run in one transaction; if any of them fails nothing is
    removed.
    """
    project = get_project_or_404(store, project_id)
    authz.can_manage_project(identity, project).enforce()

    with store.transaction() as tx:
        members = tx.delete(Entity.PROJECT_MEMBER, {"project_id": project.id})
        tasks = tx.delete(Entity.TASK, {"project_id": project.id})
        feedback = tx.delete(Entity.PEER_FEEDBACK, {"project_id": project.id})
        tx.delete(Entity.PROJECT, {"id": project.id})

    logger.info(
        f"Project {project.id} deleted with {members} members, {tasks} tasks and {feedback} feedback entries"
    )
    record_activity(store, identity.user_id, ActionType.PROJECT_DELETED, f"Deleted project: {project.title}")


def list_members(store: PersistencePort, identity: Identity, project_id: str) -> List[ProjectMemberResponse]:
    project = get_project(store, identity, project_id)
    members = store.find(Entity.PROJECT_MEMBER, {"project_id": project.id}, order_by="joined_at")
    users = {
        user.id: user
        for user in store.find(Entity.USER, {"id": In(member.user_id for member in members)})
    }

    results = []
    for member in members:
        user = users.get(member.user_id)
        if user is None:
            logger.warning(f"Membership {member.id} references missing user {member.user_id}")
            continue
        results.append(
            ProjectMemberResponse(
                **member.model_dump(),
                user=UserSummary(id=user.id, name=user.name, email=user.email, role=user.role),
            )
        )
    return results
