from vela_identity.application.services.authentication_service import (
    AuthenticationService,
)
from vela_identity.application.services.session_service import SessionService

__all__ = [
    "AuthenticationService",
    "SessionService",
]
