"""Identity context handed to the core by the session layer."""
import enum
from dataclasses import dataclass
from typing import Optional

from mentorhub.core.exceptions import UnauthenticatedError


class Role(str, enum.Enum):
    MENTOR = "MENTOR"
    STUDENT = "STUDENT"


@dataclass(frozen=True)
class Identity:
    """An authenticated ``(user_id, role)`` pair.

    ``role`` is kept as the raw string the caller supplied so that an
    unrecognised value reaches the authorization engine and is denied there
    with an explicit invalid-role signal.
    """

    user_id: str
    role: str

    @property
    def is_mentor(self) -> bool:
        return self.role == Role.MENTOR.value

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT.value

    @property
    def has_valid_role(self) -> bool:
        return self.is_mentor or self.is_student


def require_identity(user_id: Optional[str], role: Optional[str]) -> Identity:
    """Build an identity, raising ``UnauthenticatedError`` when no user id is present."""
    if not user_id or not user_id.strip():
        raise UnauthenticatedError("Missing authentication credentials")
    return Identity(user_id=user_id.strip(), role=(role or "").strip().upper())
