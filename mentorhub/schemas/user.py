"""Schemas for users"""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from mentorhub.core.identity import Role


class UserCreate(BaseModel):
    name: str = Field(..., max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Role.STUDENT

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value


class UserSummary(BaseModel):
    id: str
    name: str
    email: str
    role: Role

    class Config:
        from_attributes = True


class UserRead(UserSummary):
    created_at: datetime
    password_hash: str = Field(default="", exclude=True, repr=False)
