# drivebook/core/exceptions.py
"""
Domain-specific exceptions for the DriveBook scheduling core.

These exceptions provide clear, business-focused error messages.
The scheduling service converts them into failure results; the API
layer converts failure results back into HTTP errors.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

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


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedException(DomainException):
    """Raised when no authenticated actor is present."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when the actor's role does not allow an action."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class TrainerNotFoundException(NotFoundException):
    """Raised when a student has no trainer association to book against."""

    def __init__(self, student_id: Optional[str] = None):
        super().__init__(
            message="Trainer not found",
            code="TRAINER_NOT_FOUND",
            details={"student_id": student_id} if student_id else {},
        )


class RoleRequiredException(ForbiddenException):
    """Raised when a trainer-only operation is attempted by another role."""

    def __init__(self, message: str, *, required_role: str, actual_role: Optional[str]):
        super().__init__(
            message=message,
            code="ROLE_REQUIRED",
            details={"required_role": required_role, "actual_role": actual_role},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    Used when key-value store operations fail, or when stored
    payloads cannot be decoded.
    """
