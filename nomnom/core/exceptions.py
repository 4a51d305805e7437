"""
Exception hierarchy for the NOMNOM recipe assistant.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class NomnomException(Exception):
    """Base exception for all recipe assistant errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class QueryValidationError(NomnomException):
    """Raised when a request is rejected before any external call is made."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(NomnomException):
    """Raised for missing settings, dimension mismatches and malformed templates.

    Fatal at startup or first use, never retried.
    """

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if setting:
            details["setting"] = setting
        super().__init__(message, details)


class UpstreamUnavailableError(NomnomException):
    """Raised when the embedding, vector index or generation service fails."""

    def __init__(
        self,
        message: str,
        service: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream error.

        Args:
            message: Error message
            service: Failing service (embedding, vector_index, generation)
            details: Additional context
        """
        details = details or {}
        details["service"] = service
        self.service = service
        super().__init__(message, details)


class UpstreamTimeoutError(UpstreamUnavailableError):
    """Raised when an upstream call exceeds its time bound.

    Callers see it as an unavailable upstream; logs keep it distinct.
    """

    def __init__(
        self,
        service: str,
        timeout_seconds: float,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["timeout_seconds"] = timeout_seconds
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"{service} call timed out after {timeout_seconds}s",
            service=service,
            details=details,
        )


class MidStreamFailureError(NomnomException):
    """Raised when generation fails after fragments were already forwarded."""

    def __init__(
        self,
        message: str,
        fragments_sent: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["fragments_sent"] = fragments_sent
        self.fragments_sent = fragments_sent
        super().__init__(message, details)
