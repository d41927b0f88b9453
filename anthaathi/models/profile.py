"""
Session Models for Anthaathi

The session record is the locally persisted answer to
"who is logged in on this device".

DESIGN DECISION: There is exactly one record at a time and no history.
Login replaces it, logout deletes it, profile edits merge into it.
"""

from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    """Supported interface languages."""
    ENGLISH = "en"
    TAMIL = "ta"


class UserProfile(BaseModel):
    """
    The logged-in farmer.

    Name and location start empty and are filled in from the profile screen.
    """

    uid: str = Field(
        default_factory=lambda: uuid4().hex,
        min_length=1,
        description="Identifier generated on this device at login"
    )
    name: str = Field(
        default="",
        max_length=100,
        description="Display name"
    )
    phone: str = Field(
        ...,
        description="Phone number the user logged in with"
    )
    language: Language = Field(
        default=Language.ENGLISH,
        description="Mirror of the language preference"
    )
    location: str = Field(
        default="",
        max_length=200,
        description="Free-text village/district"
    )

    @property
    def display_name(self) -> Optional[str]:
        """Name if set, otherwise None so callers can fall back to a translated label."""
        return self.name or None


class ProfileUpdate(BaseModel):
    """
    A partial update to the session record.

    Only fields that were explicitly set are merged; the identifier
    cannot be changed through an update.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = None
    language: Optional[Language] = None
    location: Optional[str] = Field(default=None, max_length=200)

    def changes(self) -> dict:
        """Fields the caller actually provided; None means "leave unchanged"."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
