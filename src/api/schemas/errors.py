"""Error envelope returned by every failing endpoint.

All exception handlers render ``ErrorResponse`` so clients can rely on one
shape: a machine-readable ``error_code``, a human-readable ``message``,
optional ``details``, correlation and request identifiers, and debug
information in development.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    """Service metadata attached to error responses."""

    name: str = Field(..., description="Name of the service", examples=["Taxmap"])
    version: str = Field(..., description="Version of the service", examples=["0.1.0"])
    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "production"],
    )


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    error_code: str = Field(
        ...,
        description="Unique error code identifying the error type",
        examples=["INVALID_AMOUNT", "UNAUTHORIZED", "PERSISTENCE_FAILURE"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Tax amount must be greater than zero"],
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details (e.g., field-specific validation errors)",
        examples=[{"total_tax_paid": "-5"}],
    )
    correlation_id: str | None = Field(
        default=None,
        description="Request correlation ID for tracing and debugging",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
    )
    severity: str | None = Field(
        default=None,
        description="Error severity level (LOW, MEDIUM, HIGH, CRITICAL)",
        examples=["LOW"],
    )
    service_info: ServiceInfo | None = Field(
        default=None,
        description="Information about the service that generated the error",
    )
    request_id: str | None = Field(
        default=None,
        description="Unique request identifier",
        examples=["req-660e8400-e29b-41d4-a716-446655440000"],
    )
    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Debug information (only populated in development environments)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error_code": "INVALID_AMOUNT",
                    "message": "Tax amount must be greater than zero",
                    "details": {"total_tax_paid": "0"},
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2024-06-14T12:00:00+00:00",
                    "severity": "LOW",
                },
                {
                    "error_code": "UNAUTHORIZED",
                    "message": "Missing token",
                    "timestamp": "2024-06-14T12:00:02+00:00",
                    "severity": "HIGH",
                },
            ]
        }
    }
