"""Peer feedback endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from mentorhub.api.dependencies import get_identity, get_store
from mentorhub.core.identity import Identity
from mentorhub.persistence import PersistencePort
from mentorhub.schemas import FeedbackCreate, PeerFeedbackRead
from mentorhub.services import feedback as feedback_service

router = APIRouter()


@router.get("", response_model=List[PeerFeedbackRead])
def list_feedback(
    project_id: Optional[str] = Query(None),
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return feedback_service.list_feedback(store, identity, project_id)


@router.post("", response_model=PeerFeedbackRead, status_code=status.HTTP_201_CREATED)
def submit_feedback(
    feedback_in: FeedbackCreate,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return feedback_service.submit_feedback(store, identity, feedback_in)
