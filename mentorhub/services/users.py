"""User registration and directory"""
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from mentorhub.core.exceptions import ConflictError, InvalidInputError
from mentorhub.core.identity import Identity, Role
from mentorhub.persistence.port import Entity, PersistencePort
from mentorhub.schemas import UserCreate, UserRead
from mentorhub.services.base import parse_input

logger = logging.getLogger(__name__)


def register_user(
    store: PersistencePort,
    data: Union[UserCreate, Dict[str, Any]],
    hash_password: Callable[[str], str],
) -> UserRead:
    """Create a user account. Password hashing is supplied by the caller."""
    user_in = parse_input(UserCreate, data)
    email = user_in.email.lower()
    if store.exists(Entity.USER, {"email": email}):
        raise ConflictError("Email already registered")

    user = store.create(
        Entity.USER,
        {
            "name": user_in.name,
            "email": email,
            "password_hash": hash_password(user_in.password),
            "role": user_in.role,
        },
    )
    logger.info(f"Registered {user.role.value} {user.id}")
    return user


def list_users(store: PersistencePort, identity: Identity, role: Optional[str] = None) -> List[UserRead]:
    """All users ordered by name, optionally narrowed to one role."""
    filters = {}
    if role is not None:
        try:
            filters["role"] = Role(role.upper())
        except ValueError:
            raise InvalidInputError(f"Invalid role filter: {role}")
    return store.find(Entity.USER, filters, order_by="name")
