"""API routers."""

from .consumers import router as consumers_router
from .fixes import router as fixes_router
from .health import router as health_router
from .reports import router as reports_router
from .roles import router as roles_router
from .sandbox import router as sandbox_router
from .scrape import router as scrape_router
from .sentiment import router as sentiment_router
from .user_details import router as user_details_router

__all__ = [
    "consumers_router",
    "fixes_router",
    "health_router",
    "reports_router",
    "roles_router",
    "sandbox_router",
    "scrape_router",
    "sentiment_router",
    "user_details_router",
]
