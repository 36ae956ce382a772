"""Schemas for project members"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, model_validator

from mentorhub.schemas.user import UserSummary


class MemberAdd(BaseModel):
    """Target of an add-member request, named by id or by email."""

    user_id: Optional[str] = None
    email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def _require_target(self):
        if not self.user_id and not self.email:
            raise ValueError("Either user_id or email is required")
        return self


class ProjectMemberRead(BaseModel):
    id: str
    project_id: str
    user_id: str
    joined_at: datetime

    class Config:
        from_attributes = True


class ProjectMemberResponse(ProjectMemberRead):
    user: UserSummary
