"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
entire domain layer. All domain exceptions should inherit from DomainException
to enable centralized exception handling in the presentation layer.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    INCORRECT_PASSWORD = "INCORRECT_PASSWORD"
    BAD_REQUEST = "BAD_REQUEST"
    CANNOT_DELETE_SELF = "CANNOT_DELETE_SELF"

    # Authentication Errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    TOKEN_REQUIRED = "TOKEN_REQUIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_SESSION = "INVALID_SESSION"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    AUTHENTICATED_USER_NOT_FOUND = "AUTHENTICATED_USER_NOT_FOUND"

    # Authorization Errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"

    # Business Rule Violations (422)
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"

    # General Errors
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    This exception provides structured error information that can be
    used by the presentation layer to generate consistent API responses.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when input validation fails."""

    default_code = ErrorCode.VALIDATION_ERROR


class BadRequestError(DomainException):
    """Raised when well-formed input is rejected by a domain check."""

    default_code = ErrorCode.BAD_REQUEST


class AuthenticationError(DomainException):
    """Raised when the caller's identity cannot be established."""

    default_code = ErrorCode.UNAUTHORIZED


class AuthorizationError(DomainException):
    """Raised when an authenticated caller lacks the required permission."""

    default_code = ErrorCode.FORBIDDEN


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    default_code = ErrorCode.ENTITY_NOT_FOUND


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing state."""

    default_code = ErrorCode.CONFLICT


class BusinessRuleViolation(DomainException):
    """Raised when a business rule or domain invariant is violated."""

    default_code = ErrorCode.BUSINESS_RULE_VIOLATION
