"""
User Model
"""
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum

from mentorhub.core.identity import Role
from mentorhub.database import Base
from mentorhub.utils.clock import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(Role), default=Role.STUDENT, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
