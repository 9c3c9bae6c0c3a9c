from vela_identity.application.queries.user_queries import (
    GetUserQuery,
    ListUsersQuery,
    UserPage,
)

__all__ = [
    "GetUserQuery",
    "ListUsersQuery",
    "UserPage",
]
