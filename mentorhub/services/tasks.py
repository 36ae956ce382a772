"""Task lifecycle"""
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from mentorhub import authorization as authz
from mentorhub.core.exceptions import InvalidInputError, NotFoundError
from mentorhub.core.identity import Identity
from mentorhub.models.engagement_log import ActionType
from mentorhub.models.task import TaskStatus
from mentorhub.persistence.port import Entity, PersistencePort
from mentorhub.schemas import ProjectRead, TaskCreate, TaskRead, TaskUpdate
from mentorhub.services.activity import record_activity
from mentorhub.services.base import find_any, get_or_404, parse_input, provided_fields
from mentorhub.services.projects import get_project_or_404

logger = logging.getLogger(__name__)


def _load_task(store: PersistencePort, task_id: str) -> Tuple[TaskRead, ProjectRead]:
    task = get_or_404(store, Entity.TASK, task_id, "Task")
    project = store.get(Entity.PROJECT, task.project_id)
    if project is None:
        raise NotFoundError("Task project not found")
    return task, project


def _require_assignable(store: PersistencePort, project: ProjectRead, user_id: str) -> None:
    """The assignee must exist and already be a member of the task's project."""
    user = store.get(Entity.USER, user_id)
    if user is None:
        raise NotFoundError(f"Assigned user {user_id} not found")
    if not store.exists(Entity.PROJECT_MEMBER, {"user_id": user.id, "project_id": project.id}):
        raise InvalidInputError(f"User '{user.name}' ({user.id}) is not a member of this project")


def create_task(store: PersistencePort, identity: Identity, data: Union[TaskCreate, Dict[str, Any]]) -> TaskRead:
    task_in = parse_input(TaskCreate, data)
    project = get_project_or_404(store, task_in.project_id)
    authz.can_manage_tasks(identity, project).enforce()
    # Assignee membership is checked and the row written in one transaction
    with store.transaction() as tx:
        if task_in.assigned_to_id is not None:
            _require_assignable(tx, project, task_in.assigned_to_id)
        task = tx.create(
            Entity.TASK,
            {
                "title": task_in.title,
                "status": TaskStatus.TODO,
                "project_id": project.id,
                "assigned_to_id": task_in.assigned_to_id,
            },
        )
    record_activity(store, identity.user_id, ActionType.TASK_UPDATE, f"Created task: {task.title}")
    return task


def get_task(store: PersistencePort, identity: Identity, task_id: str) -> TaskRead:
    task, project = _load_task(store, task_id)
    authz.can_read_task(identity, task, project).enforce()
    return task


def list_tasks(store: PersistencePort, identity: Identity, project_id: Optional[str] = None) -> List[TaskRead]:
    """Mentors list one of their projects; students list the tasks assigned to them."""
    project = get_project_or_404(store, project_id) if project_id else None
    filters = authz.task_list_filters(identity, project)
    return find_any(store, Entity.TASK, filters, order_by="-created_at")


def update_task(
    store: PersistencePort, identity: Identity, task_id: str, patch: Union[TaskUpdate, Dict[str, Any]]
) -> TaskRead:
    """Apply the fields present in ``patch``.

    Any status may follow any other; there is no transition graph.
    """
    task, project = _load_task(store, task_id)
    authz.can_update_task(identity, task, project, provided_fields(patch)).enforce()

    changes = parse_input(TaskUpdate, patch).model_dump(exclude_unset=True)
    if not changes:
        raise InvalidInputError("No task fields to update")
    with store.transaction() as tx:
        if changes.get("assigned_to_id") is not None:
            _require_assignable(tx, project, changes["assigned_to_id"])
        updated = tx.update(Entity.TASK, task.id, changes)
    if updated is None:
        raise NotFoundError("Task not found")
    record_activity(store, identity.user_id, ActionType.TASK_UPDATE, f"Updated task: {updated.title}")
    return updated


def delete_task(store: PersistencePort, identity: Identity, task_id: str) -> None:
    task, project = _load_task(store, task_id)
    authz.can_manage_tasks(identity, project).enforce()
    store.delete(Entity.TASK, {"id": task.id})
    logger.info(f"Task {task.id} deleted from project {project.id}")
