"""
TOTP Models

Pydantic models for code requests and responses.
"""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class TotpRequest(BaseModel):
    """Code request, sent as JSON body or query string."""
    secret_key: Optional[str] = Field(None, alias='secretKey', description="Base32 shared secret")
    box_id: Optional[str] = Field(None, alias='boxId')
    timestamp: Optional[int] = Field(None, description="Unix seconds, defaults to now")

    class Config:
        populate_by_name = True


class TotpResponse(BaseModel):
    """Generated code and its validity window."""
    success: bool = True
    box_id: str = Field(..., alias='boxId')
    totp_code: str = Field(..., alias='totpCode')
    time_remaining: int = Field(..., alias='timeRemaining')
    valid_until: datetime = Field(..., alias='validUntil')
    timestamp: int
    message: str

    class Config:
        populate_by_name = True
