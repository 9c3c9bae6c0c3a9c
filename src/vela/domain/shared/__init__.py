"""Shared domain components.

This module exports the exception hierarchy and time helpers used across
domain boundaries.
"""

from vela.domain.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from vela.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "BadRequestError",
    "AuthenticationError",
    "AuthorizationError",
    "EntityNotFoundError",
    "ConflictError",
    "BusinessRuleViolation",
    # Utilities
    "ensure_tz_aware",
    "utc_now",
]
