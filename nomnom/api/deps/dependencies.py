"""
Dependency injection container.

Factory functions for FastAPI dependencies. The service context is built
once in the application lifespan and read from app.state here.

Dependencies: nomnom.configs, nomnom.application
System role: DI container for service injection
"""

from fastapi import Depends, Request

from nomnom.application.service_context import ServiceContext
from nomnom.application.services import ChatService
from nomnom.configs import Settings, get_settings
from nomnom.core.exceptions import ConfigurationError


def get_settings_dependency() -> Settings:
    """Get application settings."""
    return get_settings()


def get_service_context(request: Request) -> ServiceContext:
    """
    Get the shared service context.

    Args:
        request: Incoming request

    Returns:
        ServiceContext: Context created at startup

    Raises:
        ConfigurationError: If the application started without a context
    """
    context = getattr(request.app.state, "service_context", None)
    if context is None:
        raise ConfigurationError("Service context is not initialized", setting="service_context")
    return context


def get_chat_service(
    context: ServiceContext = Depends(get_service_context),
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    """
    Get chat service for the current request.

    ChatService is stateless, so one is created per request around the
    shared context.
    """
    return ChatService(
        context=context,
        top_k=settings.retrieval.top_k,
        history_window=settings.retrieval.history_window,
    )
