"""
Schema and Pydantic Models for the Shamiri API.

This file contains models used by the API layer. For stored records see
shamiri.models.journal instead.
"""

from datetime import date
from pydantic import BaseModel, Field
from typing import List, Optional


# =============================================================================
# Ask AI
# =============================================================================


class AskEntryRequest(BaseModel):
    """
    One round of the per-entry conversation. The caller keeps the history and
    resends it every time; ``answers`` may trail ``questions`` by one.
    """

    questions: List[str] = Field(..., description="All questions so far, oldest first.")
    answers: List[str] = Field(
        default_factory=list, description="Answers received so far, oldest first."
    )


class AskEntryResponse(BaseModel):
    answer: str


# =============================================================================
# Entries
# =============================================================================


class EntryCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    mood: str = Field(..., description="Mood code, e.g. 'CALM'")
    category_id: Optional[str] = None


class EntryUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    mood: Optional[str] = None
    category_id: Optional[str] = None


class EntryFilters(BaseModel):
    """Listing filters. ``category_id='unorganized'`` selects entries without a category."""

    category_id: Optional[str] = None
    mood: Optional[str] = None
    search: Optional[str] = None
    on_date: Optional[date] = None


# =============================================================================
# Categories and drafts
# =============================================================================


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class DraftSave(BaseModel):
    title: str = ""
    content: str = ""
    mood: str = ""
