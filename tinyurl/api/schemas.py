"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.

The request URL is a plain string rather than HttpUrl: HttpUrl normalizes
its input (trailing slashes, host case), while mappings store the URL
exactly as submitted. Validation happens in the allocator.
"""

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request model for URL shortening endpoint."""
    url: str = Field(..., description="The long URL to shorten")


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    code: str = Field(..., description="The assigned short code")
    short_url: str = Field(..., description="The complete short URL")


class ResolveResponse(BaseModel):
    """Response model for the JSON resolve endpoint."""
    code: str
    url: str
