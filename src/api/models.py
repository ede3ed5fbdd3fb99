"""Pydantic models for API requests and responses.

This module defines the request/response schemas for the Discovery API.
Conversation state travels in the request and response bodies; the server
keeps none.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from src.discovery.models import ConversationState, DiscoveryResponse


# =============================================================================
# Discovery Models
# =============================================================================


class StartDiscoveryRequest(BaseModel):
    """Request to start a discovery conversation."""

    description: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Free-form description of the business and what the app should do",
        examples=[
            "I'm a solo plumber and I need to keep track of jobs and invoices",
            "We run a small cleaning company with 4 staff",
        ],
    )
    seed: Optional[int] = Field(
        None,
        ge=0,
        description="Seed for acknowledgment wording; random when omitted",
    )


class ContinueDiscoveryRequest(BaseModel):
    """Request to continue a conversation with the user's next reply."""

    state: ConversationState = Field(..., description="State returned by the previous turn")
    message: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="The user's reply",
    )


class DiscoveryTurnResponse(BaseModel):
    """Response for one conversation turn."""

    response: DiscoveryResponse = Field(..., description="What to show the user")
    state: ConversationState = Field(..., description="State to send back with the next reply")


# =============================================================================
# Health Check Models
# =============================================================================


class HealthStatus(BaseModel):
    """Individual component health status."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Component status"
    )
    message: Optional[str] = Field(None, description="Additional status message")
    details: dict[str, Any] = Field(default_factory=dict, description="Component specifics")


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Overall system status"
    )
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Check timestamp")
    ai_configured: bool = Field(..., description="Whether the text-completion provider is configured")
    services: dict[str, HealthStatus] = Field(
        default_factory=dict,
        description="Individual component statuses",
    )
    uptime_seconds: Optional[float] = Field(None, description="Server uptime in seconds")


# =============================================================================
# Error Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    path: Optional[str] = Field(None, description="Request path that caused the error")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp",
    )


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Optional[Any] = Field(None, description="Invalid value provided")


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: str = Field(default="validation_error", description="Error type")
    message: str = Field(default="Request validation failed", description="Error message")
    errors: list[ValidationErrorDetail] = Field(..., description="List of validation errors")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
