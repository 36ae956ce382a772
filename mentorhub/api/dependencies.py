from functools import lru_cache
from typing import Callable, Iterator, Optional

from fastapi import Header

from mentorhub.config import settings
from mentorhub.core.identity import Identity, require_identity
from mentorhub.core.security import get_password_hash
from mentorhub.database import SessionLocal
from mentorhub.persistence import MemoryStore, PersistencePort, SqlAlchemyStore


@lru_cache(maxsize=1)
def _memory_store() -> MemoryStore:
    return MemoryStore()


def get_store() -> Iterator[PersistencePort]:
    """One store per request, bound to the configured backend."""
    if settings.STORAGE_BACKEND == "memory":
        yield _memory_store()
        return

    db = SessionLocal()
    try:
        yield SqlAlchemyStore(db)
    finally:
        db.close()


def get_identity(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> Identity:
    """Identity forwarded by the session layer in the X-User-Id / X-User-Role headers."""
    return require_identity(x_user_id, x_user_role)


def get_password_hasher() -> Callable[[str], str]:
    """Hash function handed to account registration."""
    return get_password_hash
