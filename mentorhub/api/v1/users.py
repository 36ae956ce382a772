"""User directory endpoint"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from mentorhub.api.dependencies import get_identity, get_store
from mentorhub.core.identity import Identity
from mentorhub.persistence import PersistencePort
from mentorhub.schemas import UserRead
from mentorhub.services import users as user_service

router = APIRouter()


@router.get("", response_model=List[UserRead])
def list_users(
    role: Optional[str] = Query(None, description="MENTOR or STUDENT"),
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return user_service.list_users(store, identity, role)
