"""API routers."""

from dashboard.api.routes.comments import router as comments_router
from dashboard.api.routes.health import router as health_router
from dashboard.api.routes.projects import router as projects_router
from dashboard.api.routes.setup import public_router as public_setup_router
from dashboard.api.routes.setup import router as setup_router
from dashboard.api.routes.users import router as users_router

__all__ = [
    "comments_router",
    "health_router",
    "projects_router",
    "public_setup_router",
    "setup_router",
    "users_router",
]
