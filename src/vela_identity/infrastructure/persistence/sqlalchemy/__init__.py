"""SQLAlchemy implementation for vela_identity persistence.

Provides:
- UserModel / SessionModel: table mappings for users and sessions
- UserRepositorySQLAlchemy: credential store implementation
- SessionRepositorySQLAlchemy: session store implementation
"""

from vela_identity.infrastructure.persistence.sqlalchemy.models import (
    SessionModel,
    UserModel,
)
from vela_identity.infrastructure.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "SessionModel",
    "SessionRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
]
