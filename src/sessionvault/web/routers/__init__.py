from sessionvault.web.routers.auth import router as auth_router
from sessionvault.web.routers.metadata import router as metadata_router
from sessionvault.web.routers.sessions import router as sessions_router

__all__ = [
    "auth_router",
    "metadata_router",
    "sessions_router",
]
