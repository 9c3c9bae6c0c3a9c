from vela_identity.infrastructure.persistence.sqlalchemy.repositories.session_repository import (  # noqa: E501
    SessionRepositorySQLAlchemy,
)
from vela_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # noqa: E501
    UserRepositorySQLAlchemy,
)

__all__ = [
    "SessionRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
