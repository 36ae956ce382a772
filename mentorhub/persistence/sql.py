"""Relational adapter for the persistence port, backed by a SQLAlchemy session."""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from mentorhub import models
from mentorhub.core.exceptions import ConflictError, InternalError
from mentorhub.persistence.port import RECORD_SCHEMAS, Entity, Filters, Gte, In, PersistencePort, sort_key

logger = logging.getLogger(__name__)

ENTITY_MODELS = {
    Entity.USER: models.User,
    Entity.PROJECT: models.Project,
    Entity.PROJECT_MEMBER: models.ProjectMember,
    Entity.TASK: models.Task,
    Entity.PEER_FEEDBACK: models.PeerFeedback,
    Entity.ENGAGEMENT_LOG: models.EngagementLog,
}


class SqlAlchemyStore(PersistencePort):
    """Persistence port over one SQLAlchemy ``Session``.

    The store owns commit and rollback on the session: a write outside a
    transaction is committed on the spot, a write inside one is only flushed
    until the outermost ``transaction()`` block exits.
    """

    def __init__(self, session: Session):
        self.session = session
        self._depth = 0

    def _query(self, entity: Entity, filters: Optional[Filters] = None) -> Query:
        model = ENTITY_MODELS[entity]
        query = self.session.query(model)
        for field, value in (filters or {}).items():
            column = getattr(model, field)
            if isinstance(value, In):
                query = query.filter(column.in_(value.values))
            elif isinstance(value, Gte):
                query = query.filter(column >= value.value)
            elif value is None:
                query = query.filter(column.is_(None))
            else:
                query = query.filter(column == value)
        return query

    def _record(self, entity: Entity, row) -> BaseModel:
        return RECORD_SCHEMAS[entity].model_validate(row)

    def _commit_or_rollback(self, error_msg: str) -> None:
        try:
            if self._depth:
                self.session.flush()
            else:
                self.session.commit()
        except IntegrityError as exc:
            if not self._depth:
                self.session.rollback()
            raise ConflictError(error_msg) from exc
        except SQLAlchemyError as exc:
            if not self._depth:
                self.session.rollback()
            logger.exception("Database write failed")
            raise InternalError("Database write failed") from exc

    def find(self, entity: Entity, filters: Optional[Filters] = None, order_by: Optional[str] = None) -> List[BaseModel]:
        query = self._query(entity, filters)
        field, descending = sort_key(order_by)
        if field:
            column = getattr(ENTITY_MODELS[entity], field)
            query = query.order_by(column.desc() if descending else column.asc())
        return [self._record(entity, row) for row in query.all()]

    def find_one(self, entity: Entity, filters: Filters) -> Optional[BaseModel]:
        row = self._query(entity, filters).first()
        return self._record(entity, row) if row is not None else None

    def count(self, entity: Entity, filters: Optional[Filters] = None) -> int:
        return self._query(entity, filters).count()

    def create(self, entity: Entity, data: Dict[str, Any]) -> BaseModel:
        row = ENTITY_MODELS[entity](**data)
        self.session.add(row)
        self._commit_or_rollback(f"{entity.value} already exists")
        return self._record(entity, row)

    def update(self, entity: Entity, id: str, patch: Dict[str, Any]) -> Optional[BaseModel]:
        row = self.session.get(ENTITY_MODELS[entity], id)
        if row is None:
            return None
        for field, value in patch.items():
            setattr(row, field, value)
        self._commit_or_rollback(f"{entity.value} update conflicts with an existing row")
        return self._record(entity, row)

    def update_many(self, entity: Entity, filters: Filters, patch: Dict[str, Any]) -> int:
        matched = self._query(entity, filters).update(patch, synchronize_session="fetch")
        self._commit_or_rollback(f"{entity.value} update conflicts with an existing row")
        return matched

    def delete(self, entity: Entity, filters: Filters) -> int:
        removed = self._query(entity, filters).delete(synchronize_session="fetch")
        self._commit_or_rollback(f"{entity.value} is still referenced")
        return removed

    @contextmanager
    def transaction(self) -> Iterator["SqlAlchemyStore"]:
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield self
            self._depth = 0
            self._commit_or_rollback("Transaction conflicts with an existing row")
        except Exception:
            self._depth = 0
            self.session.rollback()
            raise
        finally:
            self._depth = 0
