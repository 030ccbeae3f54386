"""Domain exception hierarchy rendered as structured error responses.

Every exception carries a machine-readable ``code`` and an HTTP
``status_code``; ``netadmin.app`` turns them into the
``{"error": {...}}`` envelope.
"""

from __future__ import annotations


class AppException(Exception):
    """Base exception for all domain errors.

    Subclasses set ``code`` and ``status_code`` at the class level; callers
    provide ``message`` and an optional ``details`` list.
    """

    code: str = "APP_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: list[dict] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []


class NotFoundException(AppException):
    code = "NOT_FOUND"
    status_code = 404


class UnauthorizedException(AppException):
    code = "UNAUTHORIZED"
    status_code = 401


class ForbiddenException(AppException):
    code = "FORBIDDEN"
    status_code = 403


class ScopeViolationException(ForbiddenException):
    """The caller is an admin, but the target lies outside their scope."""

    code = "SCOPE_VIOLATION"


class ValidationException(AppException):
    code = "VALIDATION_ERROR"
    status_code = 422


class BusinessRuleException(AppException):
    code = "BUSINESS_RULE_VIOLATION"
    status_code = 422


class ImmutableRecordException(BusinessRuleException):
    """Raised on attempts to change a record that is frozen once written or sent."""

    code = "IMMUTABLE_RECORD"
