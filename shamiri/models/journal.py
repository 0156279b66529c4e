"""
Domain models for journal data.

These mirror the rows the stores read and write. API request/response
shapes live in shamiri.models.schema.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field

from shamiri.models.moods import Mood


def utc_now() -> datetime:
    """Current time as naive UTC, the convention for every stored timestamp."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(BaseModel):
    id: str
    auth_user_id: str
    created_at: datetime


class Category(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class JournalEntry(BaseModel):
    """
    A user-authored journal record. ``content`` is rich markup produced by the
    editor; ``mood`` is a code from the mood catalogue.
    """

    id: str
    user_id: str
    title: str
    content: str
    mood: str
    mood_score: int
    mood_image_url: Optional[str] = None
    category_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    # Populated by EntryService when reading a single entry
    category: Optional[Category] = None
    mood_data: Optional[Mood] = None


class Draft(BaseModel):
    id: str
    user_id: str
    title: str = ""
    content: str = ""
    mood: str = ""
    updated_at: datetime = Field(default_factory=utc_now)
