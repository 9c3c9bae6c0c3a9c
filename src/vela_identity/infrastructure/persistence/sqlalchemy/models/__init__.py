from vela_identity.infrastructure.persistence.sqlalchemy.models.session_model import (
    SessionModel,
)
from vela_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "SessionModel",
    "UserModel",
]
