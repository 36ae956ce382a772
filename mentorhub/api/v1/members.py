"""Project membership endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status

from mentorhub.api.dependencies import get_identity, get_store
from mentorhub.core.identity import Identity
from mentorhub.persistence import PersistencePort
from mentorhub.schemas import MemberAdd, ProjectMemberRead, ProjectMemberResponse
from mentorhub.services import members as member_service
from mentorhub.services import projects as project_service

router = APIRouter()


@router.get("/{project_id}/members", response_model=List[ProjectMemberResponse])
def list_members(
    project_id: str,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return project_service.list_members(store, identity, project_id)


@router.post("/{project_id}/members", response_model=ProjectMemberRead, status_code=status.HTTP_201_CREATED)
def add_member(
    project_id: str,
    member_in: MemberAdd,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return member_service.add_member(store, identity, project_id, member_in)


@router.delete("/{project_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    project_id: str,
    user_id: str,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    """Remove a member; their tasks in this project become unassigned."""
    member_service.remove_member(store, identity, project_id, user_id)
