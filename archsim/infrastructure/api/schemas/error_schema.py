"""
RFC 7807 Problem Details error response schemas.

Implements standard error response format for the API.
"""

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """
    RFC 7807 Problem Details for HTTP APIs.

    Every error returned by the service, including request validation
    failures and rate limiting, uses this shape.
    """

    type: str = Field(
        ...,
        description="URI reference that identifies the problem type",
    )
    title: str = Field(..., description="Short, human-readable summary of the problem")
    status: int = Field(..., description="HTTP status code", ge=100, le=599)
    detail: str = Field(
        ..., description="Human-readable explanation specific to this occurrence"
    )
    instance: str = Field(
        ..., description="URI reference that identifies the specific occurrence"
    )
    correlation_id: str | None = Field(
        None, description="Correlation ID for request tracing"
    )
    retry_after_seconds: int | None = Field(
        None,
        description="Seconds to wait before retrying (for 429 responses)",
        ge=0,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "type": "about:blank",
                    "title": "Unprocessable Entity",
                    "status": 422,
                    "detail": "Validation failed: traffic_profile: Read and write percentages must sum to 100.",
                    "instance": "/api/v1/simulations",
                },
                {
                    "type": "https://httpstatuses.com/429",
                    "title": "Too Many Requests",
                    "status": 429,
                    "detail": "Rate limit exceeded. Try again in 12 seconds.",
                    "instance": "/api/v1/simulations",
                    "retry_after_seconds": 12,
                },
            ]
        }
    )


STATUS_TEXTS = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def status_text(status_code: int) -> str:
    """Human-readable title for an HTTP status code."""
    return STATUS_TEXTS.get(status_code, "Error")
