"""Analytics endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mentorhub.api.dependencies import get_identity, get_store
from mentorhub.core.identity import Identity
from mentorhub.persistence import PersistencePort
from mentorhub.schemas import ProjectAnalytics, StudentAnalytics
from mentorhub.services import analytics as analytics_service

router = APIRouter()


@router.get("/project/{project_id}", response_model=ProjectAnalytics)
def project_analytics(
    project_id: str,
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return analytics_service.project_analytics(store, identity, project_id)


@router.get("/student/{user_id}", response_model=StudentAnalytics)
def student_analytics(
    user_id: str,
    project_id: Optional[str] = Query(None),
    identity: Identity = Depends(get_identity),
    store: PersistencePort = Depends(get_store),
):
    return analytics_service.student_analytics(store, identity, user_id, project_id)
