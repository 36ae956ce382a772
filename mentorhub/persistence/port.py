"""Storage-agnostic persistence interface.

Workflows are written once against ``PersistencePort``; each storage technology
provides a thin adapter (``SqlAlchemyStore`` for relational databases,
``MemoryStore`` for the document-style store).

Filters are plain dicts mapping a field name to either a value (equality,
``None`` meaning "is null"), ``In(values)`` or ``Gte(value)``. All conditions
in one dict are combined with AND.
"""
import abc
import enum
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel

from mentorhub import schemas

T = TypeVar("T")

Filters = Dict[str, Any]


class Entity(str, enum.Enum):
    USER = "user"
    PROJECT = "project"
    PROJECT_MEMBER = "project_member"
    TASK = "task"
    PEER_FEEDBACK = "peer_feedback"
    ENGAGEMENT_LOG = "engagement_log"


RECORD_SCHEMAS: Dict[Entity, Type[BaseModel]] = {
    Entity.USER: schemas.UserRead,
    Entity.PROJECT: schemas.ProjectRead,
    Entity.PROJECT_MEMBER: schemas.ProjectMemberRead,
    Entity.TASK: schemas.TaskRead,
    Entity.PEER_FEEDBACK: schemas.PeerFeedbackRead,
    Entity.ENGAGEMENT_LOG: schemas.EngagementLogRead,
}


@dataclass(frozen=True)
class In:
    """Field value must be one of ``values``."""

    values: tuple

    def __init__(self, values: Iterable[Any]):
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True)
class Gte:
    """Field value must be greater than or equal to ``value``."""

    value: Any


class PersistencePort(abc.ABC):
    """Entity CRUD plus an all-or-nothing transaction primitive.

    Writes issued outside ``transaction()`` are committed immediately. Writes
    issued inside it become visible together when the block exits normally and
    are discarded when it raises. Nested ``transaction()`` blocks join the
    outermost one.
    """

    @abc.abstractmethod
    def find(self, entity: Entity, filters: Optional[Filters] = None, order_by: Optional[str] = None) -> List[BaseModel]:
        """Return all records matching ``filters``.

        ``order_by`` names a field; a leading ``-`` sorts descending.
        """

    @abc.abstractmethod
    def find_one(self, entity: Entity, filters: Filters) -> Optional[BaseModel]:
        """Return one matching record or ``None``."""

    @abc.abstractmethod
    def count(self, entity: Entity, filters: Optional[Filters] = None) -> int:
        """Count records matching ``filters``."""

    @abc.abstractmethod
    def create(self, entity: Entity, data: Dict[str, Any]) -> BaseModel:
        """Insert a record and return it with its generated id and timestamps."""

    @abc.abstractmethod
    def update(self, entity: Entity, id: str, patch: Dict[str, Any]) -> Optional[BaseModel]:
        """Apply ``patch`` to the record ``id``; ``None`` when it does not exist."""

    @abc.abstractmethod
    def update_many(self, entity: Entity, filters: Filters, patch: Dict[str, Any]) -> int:
        """Apply ``patch`` to every matching record and return how many matched."""

    @abc.abstractmethod
    def delete(self, entity: Entity, filters: Filters) -> int:
        """Delete every matching record and return how many were removed."""

    @abc.abstractmethod
    @contextmanager
    def transaction(self) -> Iterator["PersistencePort"]:
        """Group the writes issued inside the block into one atomic unit."""

    def get(self, entity: Entity, id: str) -> Optional[BaseModel]:
        return self.find_one(entity, {"id": id})

    def exists(self, entity: Entity, filters: Filters) -> bool:
        return self.count(entity, filters) > 0

    def with_transaction(self, fn: Callable[["PersistencePort"], T]) -> T:
        """Run ``fn(store)`` inside one transaction and return its result."""
        with self.transaction() as store:
            return fn(store)


def sort_key(order_by: Optional[str]):
    """Split an ``order_by`` value into ``(field, descending)``."""
    if not order_by:
        return None, False
    if order_by.startswith("-"):
        return order_by[1:], True
    return order_by, False
