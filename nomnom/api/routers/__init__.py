"""API routers."""

from nomnom.api.routers.chat import router as chat_router
from nomnom.api.routers.health import router as health_router

__all__ = ["chat_router", "health_router"]
