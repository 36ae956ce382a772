"""Project endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status

from mentorhub.api.dependencies import get_identity, get_store
from mentorhub.core.identity import Identity
from mentorhub.persistence import PersistencePort
from mentorhub.schemas import ProjectCreate, ProjectRead, ProjectUpdate
from mentorhub.services import projects as project_service

router = APIRouter()


@router.get("", response_model=List[ProjectRead])
def list_projects(
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    """Projects owned by the calling mentor or joined by the calling student."""
    return project_service.list_projects(store, identity)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: ProjectCreate,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return project_service.create_project(store, identity, project_in)


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project_id: str,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return project_service.get_project(store, identity, project_id)


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return project_service.update_project(store, identity, project_id, project_update)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    """Delete a project with all of its members, tasks and feedback."""
    project_service.delete_project(store, identity, project_id)
