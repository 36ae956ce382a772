"""Engagement logging endpoint"""
from fastapi import APIRouter, Depends, status

from mentorhub.api.dependencies import get_identity, get_store
from mentorhub.core.identity import Identity
from mentorhub.persistence import PersistencePort
from mentorhub.schemas import EngagementLogCreate, EngagementLogRead
from mentorhub.services import activity

router = APIRouter()


@router.post("", response_model=EngagementLogRead, status_code=status.HTTP_201_CREATED)
def log_engagement(
    log_in: EngagementLogCreate,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    """Record an activity performed by the caller."""
    return activity.log_engagement(store, identity, log_in)
