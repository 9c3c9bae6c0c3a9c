"""Credential and token primitives."""

from vela_identity.services.jwt_service import JWTService
from vela_identity.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
]
