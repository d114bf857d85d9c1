"""
Noteful Backend: Shared Response Schemas
========================================

What:  Error and health response models shared by every router.
Why:   Clients parse one error shape everywhere: {"error": {"message": "..."}}.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {"error": {"message": "Folder doesn't exist"}}
    """
    error: ErrorDetail


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def error_body(message: str) -> dict:
    """The JSON body every exception handler returns."""
    return ErrorResponse(error=ErrorDetail(message=message)).model_dump()
