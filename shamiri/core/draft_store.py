from typing import Optional
import uuid
from sqlalchemy import delete, select, update

from shamiri.core.database import Database
from shamiri.models.journal import Draft, utc_now


class DraftStore:
    """At most one draft per user; saving overwrites it."""

    def __init__(self, db: Database):
        self.db = db

    async def get(self, user_id: str) -> Optional[Draft]:
        drafts = self.db.drafts
        async with self.db.engine.connect() as conn:
            result = await conn.execute(select(drafts).where(drafts.c.user_id == user_id))
            row = result.first()
            if not row:
                return None
            values = {k: (v if v is not None else "") for k, v in row._mapping.items()}
            return Draft(**values)

    async def save(self, user_id: str, title: str, content: str, mood: str) -> Draft:
        drafts = self.db.drafts
        now = utc_now()
        values = {"title": title, "content": content, "mood": mood, "updated_at": now}

        async with self.db.engine.begin() as conn:
            result = await conn.execute(
                update(drafts).where(drafts.c.user_id == user_id).values(**values)
            )
            if result.rowcount == 0:
                await conn.execute(
                    drafts.insert().values(id=str(uuid.uuid4()), user_id=user_id, **values)
                )
        return await self.get(user_id)

    async def delete_for_user(self, user_id: str) -> int:
        async with self.db.engine.begin() as conn:
            result = await conn.execute(delete(self.db.drafts).where(self.db.drafts.c.user_id == user_id))
            return result.rowcount
