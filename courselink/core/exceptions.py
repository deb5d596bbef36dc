"""
Domain exceptions for the defence scheduling core.

Services raise these with a stable ``code`` and the offending ids in
``details``; the route layer turns them into HTTP responses.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain rule violations."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class InvalidArgumentException(DomainException):
    """Raised when request input is malformed (bad count, bad time order)."""

    status_code = HTTP_422_UNPROCESSABLE


class NotFoundException(DomainException):
    """Raised when a referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when the request clashes with existing state."""

    status_code = status.HTTP_409_CONFLICT


class ForbiddenException(DomainException):
    """Raised when the acting user's role may not perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN
