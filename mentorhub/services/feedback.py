"""Peer feedback lifecycle"""
import logging
from typing import Any, Dict, List, Optional, Union

from mentorhub import authorization as authz
from mentorhub.core.exceptions import InvalidInputError
from mentorhub.core.identity import Identity
from mentorhub.models.engagement_log import ActionType
from mentorhub.persistence.port import Entity, PersistencePort
from mentorhub.schemas import FeedbackCreate, PeerFeedbackRead
from mentorhub.services.activity import record_activity
from mentorhub.services.base import find_any, get_or_404, parse_input
from mentorhub.services.projects import get_project_or_404

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def submit_feedback(
    store: PersistencePort, identity: Identity, data: Union[FeedbackCreate, Dict[str, Any]]
) -> PeerFeedbackRead:
    """Rate another member of a shared project.

    Self-feedback and out-of-range ratings are rejected before any lookup;
    then the project and recipient must exist and both sides must currently be
    members of the project.
    """
    feedback_in = parse_input(FeedbackCreate, data)
    if feedback_in.to_user_id == identity.user_id:
        raise InvalidInputError("You cannot give feedback to yourself")
    if not MIN_RATING <= feedback_in.rating <= MAX_RATING:
        raise InvalidInputError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")

    project = get_project_or_404(store, feedback_in.project_id)
    get_or_404(store, Entity.USER, feedback_in.to_user_id, "Feedback recipient")
    lookup = authz.StoreMembershipLookup(store)
    authz.can_submit_feedback(identity, project, feedback_in.to_user_id, lookup).enforce()

    feedback = store.create(
        Entity.PEER_FEEDBACK,
        {
            "project_id": project.id,
            "from_user_id": identity.user_id,
            "to_user_id": feedback_in.to_user_id,
            "rating": feedback_in.rating,
            "comment": feedback_in.comment,
        },
    )
    record_activity(
        store,
        identity.user_id,
        ActionType.FEEDBACK_GIVEN,
        f"Gave feedback to {feedback_in.to_user_id} in project {project.id}",
    )
    return feedback


def list_feedback(
    store: PersistencePort, identity: Identity, project_id: Optional[str] = None
) -> List[PeerFeedbackRead]:
    """Mentors see feedback in projects they own; students see feedback they gave or received."""
    filter_list = authz.feedback_list_filters(identity, authz.StoreMembershipLookup(store))
    if project_id is not None:
        if identity.is_mentor:
            project = get_project_or_404(store, project_id)
            authz.can_manage_project(identity, project).enforce()
        filter_list = [{**filters, "project_id": project_id} for filters in filter_list]
    return find_any(store, Entity.PEER_FEEDBACK, filter_list, order_by="-created_at")
