from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class UrlCreate(BaseModel):
    """Body of POST /url.

    Both fields are plain optional strings: trimming, normalization and
    validation happen in the resolver so every client gets the same rules
    and the same error messages.
    """
    slug: Optional[str] = Field(None, description="Custom slug (5-20 chars: letters, digits, '_' or '-')")
    url: Optional[str] = Field(None, description="The URL to redirect to")


class UrlMappingResponse(BaseModel):
    """Serializes the stored UrlMapping model (from_attributes reads ORM attributes)."""
    id: int
    slug: str
    url: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    stack: Optional[str] = None
