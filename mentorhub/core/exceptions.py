"""Error taxonomy for MentorHub workflows.

Every workflow raises one of these kinds. Transport layers map them to their
own representation; see ``mentorhub.api.errors`` for the HTTP mapping.
"""


class MentorHubError(Exception):
    """Base class for all domain failures."""

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail


class UnauthenticatedError(MentorHubError):
    """No identity context present"""


class ForbiddenError(MentorHubError):
    """Identity present but not allowed to perform the operation"""


class InvalidRoleError(ForbiddenError):
    """Identity carries a role outside MENTOR/STUDENT"""

    def __init__(self, detail: str = "Invalid user role"):
        super().__init__(detail)


class NotFoundError(MentorHubError):
    """Referenced entity does not exist"""


class ConflictError(MentorHubError):
    """Uniqueness or state precondition violated"""


class InvalidInputError(MentorHubError):
    """Malformed or out-of-range field"""


class InternalError(MentorHubError):
    """Persistence failure not attributable to the caller"""
