from vela.presentation.api.routers.auth import router as auth_router
from vela.presentation.api.routers.index import router as index_router
from vela.presentation.api.routers.sessions import router as sessions_router
from vela.presentation.api.routers.users import router as users_router

__all__ = [
    "auth_router",
    "index_router",
    "sessions_router",
    "users_router",
]
