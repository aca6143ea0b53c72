"""
RecipeBook Backend — Shared Response Schemas
==============================================

What:  Error and health response models shared by every route module.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement: {"message": "..."}."""

    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    What:  Shape of error bodies, used for OpenAPI documentation.

    Depending on the endpoint the description is returned under `message` or
    under `error`; exactly one of the two is present.
    """

    message: Optional[str] = Field(default=None, description="Error description (most endpoints)")
    error: Optional[str] = Field(default=None, description="Error description (signup, favorites, add_recipe)")
    details: Optional[str] = Field(default=None, description="Provider reason for token rejection")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service status."""

    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    firebase: str = Field(description="Firebase app state: initialized, not_initialized")
    uptime_seconds: float = Field(description="Seconds since service started")
