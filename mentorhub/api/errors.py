import logging

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mentorhub.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidInputError,
    MentorHubError,
    NotFoundError,
    UnauthenticatedError,
)
from mentorhub.services.base import describe_errors

logger = logging.getLogger(__name__)

STATUS_CODES = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: MentorHubError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_exception_handler(request, exc: MentorHubError):
    """Render a workflow failure as JSON"""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        detail = "Internal server error"
    else:
        detail = exc.detail
    return JSONResponse(
        status_code=status_code,
        content={"error_code": status_code, "detail": detail},
    )


async def validation_exception_handler(request, exc: RequestValidationError):
    """Malformed request body or query, reported as ``field: message`` lines."""
    messages = describe_errors(exc.errors())
    logger.debug(f"{request.method} {request.url.path} rejected: {messages}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error_code": status.HTTP_422_UNPROCESSABLE_ENTITY, "detail": "; ".join(messages)},
    )
