"""Draft persistence while an entry is being written."""

from typing import Optional

from shamiri.core.database import Database
from shamiri.core.draft_store import DraftStore
from shamiri.errors import ValidationError
from shamiri.models.journal import Draft
from shamiri.models.moods import get_mood_by_id
from shamiri.models.schema import DraftSave


class DraftService:
    def __init__(self, db: Database):
        self.store = DraftStore(db)

    async def get_draft(self, user_id: str) -> Optional[Draft]:
        return await self.store.get(user_id)

    async def save_draft(self, user_id: str, data: DraftSave) -> Draft:
        # A draft may be saved before a mood is picked
        mood = ""
        if data.mood:
            found = get_mood_by_id(data.mood)
            if found is None:
                raise ValidationError("Invalid mood", {"field": "mood", "value": data.mood})
            mood = found.id
        return await self.store.save(user_id, data.title, data.content, mood)
