"""Best-effort activity trail.

Recording an action must never fail, block or roll back the operation that
triggered it, so ``ActivityLog.record`` logs and swallows every error. Action
types are validated by the caller before they reach this module.
"""
import logging
from typing import Any, Dict, Optional, Union

from mentorhub.core.exceptions import InvalidRoleError
from mentorhub.core.identity import Identity
from mentorhub.models.engagement_log import ActionType
from mentorhub.persistence.port import Entity, PersistencePort
from mentorhub.schemas import EngagementLogCreate, EngagementLogRead
from mentorhub.services.base import parse_input

logger = logging.getLogger(__name__)


class ActivityLog:
    def __init__(self, store: PersistencePort):
        self.store = store

    def record(
        self, user_id: str, action_type: Union[ActionType, str], details: Optional[str] = None
    ) -> Optional[EngagementLogRead]:
        label = getattr(action_type, "value", action_type)
        try:
            return self.store.create(
                Entity.ENGAGEMENT_LOG,
                {"user_id": user_id, "action_type": label, "details": details},
            )
        except Exception:
            logger.exception(f"Failed to record {label} activity for user {user_id}")
            return None


def record_activity(
    store: PersistencePort, user_id: str, action_type: Union[ActionType, str], details: Optional[str] = None
) -> Optional[EngagementLogRead]:
    return ActivityLog(store).record(user_id, action_type, details)


def log_engagement(
    store: PersistencePort, identity: Identity, data: Union[EngagementLogCreate, Dict[str, Any]]
) -> EngagementLogRead:
    """Store an engagement entry reported by the caller for themselves.

    Unlike ``record_activity`` this is the caller's own write, so failures
    propagate.
    """
    if not identity.has_valid_role:
        raise InvalidRoleError()
    log_in = parse_input(EngagementLogCreate, data)
    return store.create(
        Entity.ENGAGEMENT_LOG,
        {"user_id": identity.user_id, "action_type": log_in.action_type.value, "details": log_in.details},
    )
