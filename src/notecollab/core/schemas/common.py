"""
Shared response schemas - errors, health
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str = Field(description="Human-readable error message")

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Only the owner can share this note"}}
    )


def error_responses(*status_codes: int) -> dict[int, dict[str, Any]]:
    """OpenAPI ``responses`` entries documenting ErrorResponse bodies."""
    return {code: {"model": ErrorResponse} for code in status_codes}


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")
    realtime_connections: int = Field(default=0, description="Open collaboration sockets")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2025-09-13T10:30:00Z",
                "version": "1.0.0",
                "checks": {
                    "database": {"status": "healthy", "response_time_ms": 15},
                    "redis": {"status": "healthy", "response_time_ms": 5},
                },
                "realtime_connections": 3,
            }
        }
    )
