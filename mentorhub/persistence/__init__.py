"""Persistence port and its storage adapters."""
from mentorhub.persistence.port import Entity, Gte, In, PersistencePort
from mentorhub.persistence.memory import MemoryStore
from mentorhub.persistence.sql import SqlAlchemyStore

__all__ = [
    "Entity",
    "Gte",
    "In",
    "PersistencePort",
    "MemoryStore",
    "SqlAlchemyStore",
]
