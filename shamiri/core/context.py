"""
Context loading for the per-entry assistant.

Resolves the entry a conversation is anchored to and renders it as a fixed
text block for the instruction message. Nothing here is cached; the block is
rebuilt on every call from the entry's current field values.
"""

import re
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict

from shamiri.core.category_store import CategoryStore
from shamiri.core.entry_store import EntryStore
from shamiri.errors import NotFoundError
from shamiri.models.journal import JournalEntry
from shamiri.models.moods import get_mood_by_id
from server.logging_config import get_logger

logger = get_logger(__name__)


class ContextBlock(BaseModel):
    """Rendered, read-only view of one entry."""

    model_config = ConfigDict(frozen=True)

    entry_id: str
    text: str


def _format_timestamp(value: datetime) -> str:
    # Stored timestamps are naive UTC
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


# Opening or closing block tag in any case or spacing
_DELIMITER = re.compile(r"<(\s*/?\s*journal_entry\s*)>", re.IGNORECASE)


def _neutralise_delimiters(text: str) -> str:
    return _DELIMITER.sub(r"&lt;\1&gt;", text)


def format_entry_context(entry: JournalEntry, category_name: Optional[str] = None) -> str:
    """
    Render an entry into the block embedded in the instruction message.

    Field order is fixed: title, mood, created, last updated, category (only
    when the entry has one), then the content as stored. Any <journal_entry>
    tag inside user-authored text is escaped so it cannot end the block.
    """
    mood = get_mood_by_id(entry.mood)
    mood_text = f"{entry.mood} ({mood.label})" if mood else entry.mood

    lines = [
        "<journal_entry>",
        f"Title: {_neutralise_delimiters(entry.title)}",
        f"Mood: {mood_text}",
        f"Created: {_format_timestamp(entry.created_at)}",
        f"Last updated: {_format_timestamp(entry.updated_at)}",
    ]
    if category_name:
        lines.append(f"Category: {_neutralise_delimiters(category_name)}")
    lines.append("Content:")
    lines.append(_neutralise_delimiters(entry.content))
    lines.append("</journal_entry>")
    return "\n".join(lines)


class ContextLoader:
    def __init__(self, entry_store: EntryStore, category_store: CategoryStore):
        self.entry_store = entry_store
        self.category_store = category_store

    async def load_context(self, entry_id: str, user_id: str) -> ContextBlock:
        """
        Build the context block for ``entry_id`` as seen by ``user_id``.

        Raises:
            NotFoundError: the entry does not exist or belongs to another user.
        """
        entry = await self.entry_store.get_owned(entry_id, user_id)
        if entry is None:
            logger.info(f"Context requested for unavailable entry {entry_id}")
            raise NotFoundError("entry")

        category_name = None
        if entry.category_id:
            category = await self.category_store.get_owned(entry.category_id, user_id)
            category_name = category.name if category else None

        return ContextBlock(entry_id=entry.id, text=format_entry_context(entry, category_name))
