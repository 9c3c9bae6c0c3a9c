"""Value objects for the user domain."""

from vela_identity.domain.user.value_objects.email import Email
from vela_identity.domain.user.value_objects.gender import Gender
from vela_identity.domain.user.value_objects.user_role import UserRole

__all__ = [
    "Email",
    "Gender",
    "UserRole",
]
