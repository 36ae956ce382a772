"""Schemas for tasks"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from mentorhub.models.task import TaskStatus
from mentorhub.schemas.base import strip_required


class TaskCreate(BaseModel):
    title: str
    project_id: str
    assigned_to_id: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value):
        return strip_required(value, "Task title")


class TaskUpdate(BaseModel):
    """Partial update; only the fields a caller sets are applied."""

    title: Optional[str] = None
    status: Optional[TaskStatus] = None
    assigned_to_id: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value):
        return strip_required(value, "Task title")

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, value):
        if value is None:
            raise ValueError("Task status cannot be null")
        return value


class TaskRead(BaseModel):
    id: str
    title: str
    status: TaskStatus
    project_id: str
    assigned_to_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
