"""Task endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from mentorhub.api.dependencies import get_identity, get_store
from mentorhub.core.identity import Identity
from mentorhub.persistence import PersistencePort
from mentorhub.schemas import TaskCreate, TaskRead, TaskUpdate
from mentorhub.services import tasks as task_service

router = APIRouter()


@router.get("", response_model=List[TaskRead])
def list_tasks(
    project_id: Optional[str] = Query(None, description="Required for mentors"),
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return task_service.list_tasks(store, identity, project_id)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return task_service.create_task(store, identity, task_in)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: str,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return task_service.get_task(store, identity, task_id)


@router.api_route("/{task_id}", methods=["PUT", "PATCH"], response_model=TaskRead)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    """Apply only the fields present in the body."""
    return task_service.update_task(store, identity, task_id, task_update)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    task_service.delete_task(store, identity, task_id)
