"""Schemas for projects"""
from datetime import datetime

from pydantic import BaseModel, field_validator

from mentorhub.schemas.base import strip_required


class ProjectCreate(BaseModel):
    title: str

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value):
        return strip_required(value, "Project title")


class ProjectUpdate(ProjectCreate):
    pass


class ProjectRead(BaseModel):
    id: str
    title: str
    mentor_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
