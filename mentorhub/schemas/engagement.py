"""Schemas for engagement logs"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from mentorhub.models.engagement_log import ActionType


class EngagementLogCreate(BaseModel):
    action_type: ActionType
    details: Optional[str] = None


class EngagementLogRead(BaseModel):
    id: str
    user_id: str
    action_type: str
    details: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
