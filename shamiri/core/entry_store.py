"""
Entry storage.

Every read and write is keyed by ``(entry_id, user_id)`` so a caller can never
reach another user's entry.
"""

from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional
from sqlalchemy import and_, delete, or_, select, update

from shamiri.core.database import Database
from shamiri.models.journal import JournalEntry, utc_now

# Fields that exist as columns; anything else on the model is derived
_COLUMNS = (
    "id", "user_id", "title", "content", "mood", "mood_score",
    "mood_image_url", "category_id", "created_at", "updated_at",
)


class EntryStore:
    def __init__(self, db: Database):
        self.db = db

    def _to_entry(self, row) -> JournalEntry:
        return JournalEntry(**row._mapping)

    async def create(self, entry: JournalEntry) -> JournalEntry:
        async with self.db.engine.begin() as conn:
            await conn.execute(
                self.db.entries.insert().values(**entry.model_dump(include=set(_COLUMNS)))
            )
        return entry

    async def get_owned(self, entry_id: str, user_id: str) -> Optional[JournalEntry]:
        """Fetch an entry only if ``user_id`` owns it."""
        entries = self.db.entries
        async with self.db.engine.connect() as conn:
            result = await conn.execute(
                select(entries).where(entries.c.id == entry_id, entries.c.user_id == user_id)
            )
            row = result.first()
            return self._to_entry(row) if row else None

    async def list_for_user(
        self,
        user_id: str,
        category_id: Optional[str] = None,
        unorganized: bool = False,
        mood: Optional[str] = None,
        search: Optional[str] = None,
        on_date: Optional[date] = None,
    ) -> List[JournalEntry]:
        """List a user's entries, newest first, narrowed by the given filters."""
        entries = self.db.entries
        query = select(entries).where(entries.c.user_id == user_id)

        if unorganized:
            query = query.where(entries.c.category_id.is_(None))
        elif category_id:
            query = query.where(entries.c.category_id == category_id)

        if mood:
            query = query.where(entries.c.mood == mood)

        if search:
            pattern = f"%{search}%"
            query = query.where(or_(entries.c.title.ilike(pattern), entries.c.content.ilike(pattern)))

        if on_date:
            start = datetime.combine(on_date, time.min)
            query = query.where(
                and_(entries.c.created_at >= start, entries.c.created_at < start + timedelta(days=1))
            )

        query = query.order_by(entries.c.created_at.desc())

        async with self.db.engine.connect() as conn:
            result = await conn.execute(query)
            return [self._to_entry(row) for row in result]

    async def update(self, entry_id: str, user_id: str, values: Dict[str, Any]) -> Optional[JournalEntry]:
        entries = self.db.entries
        values = {k: v for k, v in values.items() if k in _COLUMNS}
        values["updated_at"] = utc_now()

        async with self.db.engine.begin() as conn:
            result = await conn.execute(
                update(entries)
                .where(entries.c.id == entry_id, entries.c.user_id == user_id)
                .values(**values)
            )
            if result.rowcount == 0:
                return None
        return await self.get_owned(entry_id, user_id)

    async def delete(self, entry_id: str, user_id: str) -> bool:
        entries = self.db.entries
        async with self.db.engine.begin() as conn:
            result = await conn.execute(
                delete(entries).where(entries.c.id == entry_id, entries.c.user_id == user_id)
            )
            return result.rowcount > 0

