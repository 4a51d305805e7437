"""FastAPI dependency providers."""

from nomnom.api.deps.dependencies import (
    get_chat_service,
    get_service_context,
    get_settings_dependency,
)

__all__ = [
    "get_chat_service",
    "get_service_context",
    "get_settings_dependency",
]
