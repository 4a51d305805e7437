"""
Common response models.

Error schema returned for requests that fail before streaming begins.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    code: str = Field(description="Stable machine-readable error code")
    error: str = Field(description="Error message")
    details: dict[str, Any] | None = Field(default=None, description="Additional error context")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
