"""
Core business logic module.

Contains the exception hierarchy and the pure pipeline stages:
retrieval, context sanitization, history formatting and prompt composition.
"""

from nomnom.core.exceptions import (
    ConfigurationError,
    MidStreamFailureError,
    NomnomException,
    QueryValidationError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

__all__ = [
    "NomnomException",
    "QueryValidationError",
    "ConfigurationError",
    "UpstreamUnavailableError",
    "UpstreamTimeoutError",
    "MidStreamFailureError",
]
