"""Exception hierarchy for the document core.

Every error carries an HTTP status and a short machine-readable code so the
API layer can translate it without inspecting the message.
"""

from __future__ import annotations

from fastapi import status


class DodoError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "dodo_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class NotFound(DodoError):
    """A document, suggestion or corpus path does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ValidationError(DodoError):
    """Input rejected before any persistence attempt."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    code = "validation_error"


class InvalidName(ValidationError):
    code = "invalid_name"


class AlreadyExists(DodoError):
    status_code = status.HTTP_409_CONFLICT
    code = "already_exists"


class PathConflict(DodoError):
    """A document already occupies the requested path."""

    status_code = status.HTTP_409_CONFLICT
    code = "path_conflict"


class NotSupported(DodoError):
    """An external capability is unavailable; callers may offer a manual fallback."""

    status_code = status.HTTP_501_NOT_IMPLEMENTED
    code = "not_supported"


class PermissionDenied(DodoError):
    """An external capability exists but the operation was refused."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "permission_denied"
