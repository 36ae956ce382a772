"""Document-style adapter for the persistence port.

Records are kept as plain dicts per collection, the way a document database
stores them. Uniqueness and transactions are enforced by the adapter itself.
"""
import copy
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel

from mentorhub.core.exceptions import ConflictError
from mentorhub.persistence.port import RECORD_SCHEMAS, Entity, Filters, Gte, In, PersistencePort, sort_key
from mentorhub.utils.clock import utcnow
from mentorhub.utils.primary_keys import new_id

logger = logging.getLogger(__name__)

# Fields stamped with the current time on insert
CREATED_FIELDS: Dict[Entity, Tuple[str, ...]] = {
    Entity.USER: ("created_at",),
    Entity.PROJECT: ("created_at", "updated_at"),
    Entity.PROJECT_MEMBER: ("joined_at",),
    Entity.TASK: ("created_at", "updated_at"),
    Entity.PEER_FEEDBACK: ("created_at",),
    Entity.ENGAGEMENT_LOG: ("timestamp",),
}

UPDATED_FIELDS: Dict[Entity, str] = {
    Entity.PROJECT: "updated_at",
    Entity.TASK: "updated_at",
}

UNIQUE_KEYS: Dict[Entity, List[Tuple[str, ...]]] = {
    Entity.USER: [("email",)],
    Entity.PROJECT_MEMBER: [("user_id", "project_id")],
}


def _matches(document: Dict[str, Any], filters: Optional[Filters]) -> bool:
    for field, expected in (filters or {}).items():
        actual = document.get(field)
        if isinstance(expected, In):
            if actual not in expected.values:
                return False
        elif isinstance(expected, Gte):
            if actual is None or actual < expected.value:
                return False
        elif actual != expected:
            return False
    return True


def _sort_value(value: Any) -> Tuple[bool, Any]:
    # None sorts first, like NULLS FIRST on ascending order
    return (value is not None, value if value is not None else 0)


class MemoryStore(PersistencePort):
    """In-process document store.

    One instance may be shared by concurrent requests: every operation runs
    under a re-entrant lock, and ``transaction()`` holds the lock for the whole
    block so its writes appear to other threads all at once.
    """

    def __init__(self):
        self._collections: Dict[Entity, Dict[str, Dict[str, Any]]] = {entity: {} for entity in Entity}
        self._lock = threading.RLock()
        self._depth = 0

    def _record(self, entity: Entity, document: Dict[str, Any]) -> BaseModel:
        return RECORD_SCHEMAS[entity].model_validate(document)

    def _check_unique(self, entity: Entity, document: Dict[str, Any]) -> None:
        for key in UNIQUE_KEYS.get(entity, []):
            values = tuple(document.get(field) for field in key)
            for other in self._collections[entity].values():
                if other["id"] != document["id"] and tuple(other.get(field) for field in key) == values:
                    raise ConflictError(f"{entity.value} with the same {', '.join(key)} already exists")

    def _select(self, entity: Entity, filters: Optional[Filters]) -> List[Dict[str, Any]]:
        return [doc for doc in self._collections[entity].values() if _matches(doc, filters)]

    def find(self, entity: Entity, filters: Optional[Filters] = None, order_by: Optional[str] = None) -> List[BaseModel]:
        with self._lock:
            documents = self._select(entity, filters)
            field, descending = sort_key(order_by)
            if field:
                documents.sort(key=lambda doc: _sort_value(doc.get(field)), reverse=descending)
            return [self._record(entity, doc) for doc in documents]

    def find_one(self, entity: Entity, filters: Filters) -> Optional[BaseModel]:
        with self._lock:
            documents = self._select(entity, filters)
            return self._record(entity, documents[0]) if documents else None

    def count(self, entity: Entity, filters: Optional[Filters] = None) -> int:
        with self._lock:
            return len(self._select(entity, filters))

    def create(self, entity: Entity, data: Dict[str, Any]) -> BaseModel:
        with self._lock:
            document = dict(data)
            document.setdefault("id", new_id())
            now = utcnow()
            for field in CREATED_FIELDS.get(entity, ()):
                document.setdefault(field, now)
            self._check_unique(entity, document)
            record = self._record(entity, document)
            self._collections[entity][document["id"]] = document
            return record

    def update(self, entity: Entity, id: str, patch: Dict[str, Any]) -> Optional[BaseModel]:
        with self._lock:
            current = self._collections[entity].get(id)
            if current is None:
                return None
            document = {**current, **patch}
            if entity in UPDATED_FIELDS:
                document[UPDATED_FIELDS[entity]] = utcnow()
            self._check_unique(entity, document)
            record = self._record(entity, document)
            self._collections[entity][id] = document
            return record

    def update_many(self, entity: Entity, filters: Filters, patch: Dict[str, Any]) -> int:
        with self.transaction():
            matched = self._select(entity, filters)
            for document in matched:
                self.update(entity, document["id"], patch)
            return len(matched)

    def delete(self, entity: Entity, filters: Filters) -> int:
        with self._lock:
            doomed = [doc["id"] for doc in self._select(entity, filters)]
            for id in doomed:
                del self._collections[entity][id]
            return len(doomed)

    @contextmanager
    def transaction(self) -> Iterator["MemoryStore"]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
                return

            snapshot = copy.deepcopy(self._collections)
            self._depth = 1
            try:
                yield self
            except Exception:
                self._collections = snapshot
                logger.debug("Transaction rolled back")
                raise
            finally:
                self._depth = 0
