"""
Observability module.

Provides structured logging configuration, correlation ID tracking
and request logging middleware.
"""

from nomnom.observability.correlation import get_correlation_id, set_correlation_id
from nomnom.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
