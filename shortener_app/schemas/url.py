from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime

# 10 years; keeps now + expires_in inside datetime range
MAX_EXPIRES_IN = 10 * 365 * 24 * 3600


class ShortenRequest(BaseModel):
    """Body of POST /api/shorten.

    url is a plain string on purpose: the service runs its own shallow
    http(s) check instead of pydantic's HttpUrl normalization.
    """
    url: str = Field(..., description="The original URL to be shortened")
    code: Optional[str] = Field(None, description="Custom short code (3-32 chars)")
    expires_in: Optional[int] = Field(
        None, gt=0, le=MAX_EXPIRES_IN, description="Expiration in seconds"
    )


class UpdateRequest(BaseModel):
    url: str = Field(..., description="The new destination URL")


class URLRecord(BaseModel):
    """Full URL record.

    from_attributes=True lets the SQLAlchemy model be read directly,
    so storage backends can hand back the same type.
    """
    code: str
    original_url: str
    clicks: int = 0
    created_at: datetime
    expires_at: Optional[datetime] = None

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)


class ShortenResponse(BaseModel):
    success: bool = True
    code: str
    original_url: str


class URLList(BaseModel):
    urls: List[URLRecord]


class URLStats(BaseModel):
    code: str
    clicks: int
    created_at: datetime

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)


class DeleteResponse(BaseModel):
    success: bool = True
    message: str = "URL deleted"


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str
