"""Schemas for peer feedback"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class FeedbackCreate(BaseModel):
    project_id: str
    to_user_id: str
    # Range is checked by the workflow so self-feedback is reported first
    rating: int
    comment: Optional[str] = ""

    @field_validator("comment")
    @classmethod
    def _default_comment(cls, value: Optional[str]) -> str:
        return value or ""


class PeerFeedbackRead(BaseModel):
    id: str
    project_id: str
    from_user_id: str
    to_user_id: str
    rating: int
    comment: str
    created_at: datetime

    class Config:
        from_attributes = True
