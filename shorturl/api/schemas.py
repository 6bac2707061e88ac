"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Separated from endpoints to keep concerns separated and enable reuse.

The field names follow the public contract of the service: a shortened URL
is reported as {"original_url", "short_url"} where short_url is the integer
code, and failures carry an "error" message.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """JSON body for URL shortening endpoint (form posts use the same field)."""
    url: Optional[str] = Field(default=None, description="The URL to shorten, scheme optional")


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    original_url: str = Field(..., description="The normalized URL")
    short_url: int = Field(..., description="The short code")


class ErrorResponse(BaseModel):
    """Response model for rejected requests."""
    error: str


class NotFoundResponse(ErrorResponse):
    """Response model for unknown short codes."""
    short: Optional[int] = Field(..., description="The requested code, null if not an integer")


class HelloResponse(BaseModel):
    greeting: str


class HealthResponse(BaseModel):
    status: str
    storage: str
    entries: int
