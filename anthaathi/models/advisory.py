"""
Advisory Models for Anthaathi

Market prices, pest diagnosis results and chat messages.
All of these are shown to the user but never persisted.
"""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator


class MarketPrice(BaseModel):
    """Mandi price band for one crop at one market, in INR per quintal."""

    id: str
    crop: str = Field(..., min_length=1)
    market: str = Field(..., min_length=1)
    min_price: int = Field(..., ge=0)
    max_price: int = Field(..., ge=0)
    modal_price: int = Field(..., ge=0)

    @model_validator(mode='after')
    def validate_price_band(self) -> 'MarketPrice':
        """The modal price must sit inside the min/max band."""
        if self.min_price > self.max_price:
            raise ValueError("Minimum price cannot exceed maximum price")
        if not self.min_price <= self.modal_price <= self.max_price:
            raise ValueError("Modal price must lie between minimum and maximum")
        return self


class DiagnosisResult(BaseModel):
    """What the pest/disease check found and what to do about it."""

    disease: str
    cause: str
    treatment: str
    prevention: str


class ChatMessage(BaseModel):
    """One bubble in the assistant conversation."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    text: str = Field(..., min_length=1)
    is_user: bool
    timestamp: datetime = Field(default_factory=datetime.now)
