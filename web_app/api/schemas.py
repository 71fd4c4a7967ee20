"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ShortenRequest(BaseModel):
    """Request to shorten a URL. Unknown fields are rejected."""

    url: StrictStr = Field(..., description="The URL to shorten")

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        },
    )


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_id: str = Field(..., description="The generated short ID")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL, as submitted")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "short_id": "q3Zx_b9A",
                    "short_url": "https://short.link/q3Zx_b9A",
                    "original_url": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z",
                }
            ]
        },
    )


class URLInfoResponse(BaseModel):
    """Response with URL information."""

    short_id: str
    original_url: str
    created_at: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="In-memory store status")
    total_urls: Optional[int] = Field(None, description="Number of stored short URLs, unknown when the store is unhealthy")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: Optional[str] = Field(None, description="Error message")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_urls: int
    max_attempts: int
    storage: str
