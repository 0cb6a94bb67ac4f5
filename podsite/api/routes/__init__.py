"""API route modules."""

from podsite.api.routes.auth import router as auth_router
from podsite.api.routes.blog import router as blog_router
from podsite.api.routes.contact import router as contact_router
from podsite.api.routes.episodes import router as episodes_router
from podsite.api.routes.health import router as health_router
from podsite.api.routes.profile import router as profile_router

__all__ = [
    "auth_router",
    "blog_router",
    "contact_router",
    "episodes_router",
    "health_router",
    "profile_router",
]
