"""Account registration endpoint"""
from typing import Callable

from fastapi import APIRouter, Depends, status

from mentorhub.api.dependencies import get_password_hasher, get_store
from mentorhub.persistence import PersistencePort
from mentorhub.schemas import UserCreate, UserRead
from mentorhub.services import users as user_service

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    user_in: UserCreate,
    store: PersistencePort = Depends(get_store),
    hash_password: Callable[[str], str] = Depends(get_password_hasher),
):
    """Create an account. No identity headers are needed."""
    return user_service.register_user(store, user_in, hash_password)
