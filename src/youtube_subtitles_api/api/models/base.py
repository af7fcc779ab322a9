"""Base response models for the API."""

from typing import Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned by every non-streaming failure."""

    error: str
    code: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    proxies: int = Field(ge=0, description="Current size of the shared proxy pool")
