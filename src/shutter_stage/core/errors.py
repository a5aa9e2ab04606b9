"""Domain errors raised by services and mapped to HTTP responses by the app."""

from __future__ import annotations

from fastapi import status


class ShutterStageError(Exception):
    """Base class for errors that terminate a request with a known status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ResourceNotFoundError(ShutterStageError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"


class PostNotFoundError(ResourceNotFoundError):
    detail = "Post not found"


class AuditLogNotFoundError(ResourceNotFoundError):
    detail = "Audit log not found"


class TagNotFoundError(ResourceNotFoundError):
    detail = "Tag not found"


class AccessDeniedError(ShutterStageError):
    """The principal is not allowed to see or change the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    detail = "You do not have permission to access this resource"


class AuthenticationRequiredError(ShutterStageError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authentication required"


class InvalidQueryError(ShutterStageError):
    """A client-supplied query parameter has an unrecognized value."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid query parameter"


class InvalidPostStatusError(InvalidQueryError):
    detail = "Invalid post status"


class DuplicatePostTagError(ShutterStageError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Post already has this tag"
