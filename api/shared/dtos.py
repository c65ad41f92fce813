"""Shared DTOs for the messaging API."""
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    class Config:
        from_attributes = True


class PaginationResponse(BaseDTO, Generic[T]):
    """Response DTO for paginated results."""
    items: List[T] = Field(description="List of items")
    total: int = Field(description="Total number of items")
    offset: int = Field(description="Number of items skipped")
    limit: int = Field(description="Maximum number of items returned")
    has_next: bool = Field(description="Whether there are more items")


class ErrorResponse(BaseDTO):
    """Error response DTO."""
    error: str = Field(description="Error code")
    detail: str = Field(description="Error message")
    status_code: int = Field(description="HTTP status code")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
