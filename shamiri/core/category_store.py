from typing import List, Optional
from sqlalchemy import delete, select

from shamiri.core.database import Database
from shamiri.models.journal import Category


class CategoryStore:
    def __init__(self, db: Database):
        self.db = db

    async def create(self, category: Category) -> Category:
        async with self.db.engine.begin() as conn:
            await conn.execute(self.db.categories.insert().values(**category.model_dump()))
        return category

    async def get_owned(self, category_id: str, user_id: str) -> Optional[Category]:
        categories = self.db.categories
        async with self.db.engine.connect() as conn:
            result = await conn.execute(
                select(categories).where(categories.c.id == category_id, categories.c.user_id == user_id)
            )
            row = result.first()
            return Category(**row._mapping) if row else None

    async def list_for_user(self, user_id: str) -> List[Category]:
        """Newest first."""
        categories = self.db.categories
        async with self.db.engine.connect() as conn:
            result = await conn.execute(
                select(categories)
                .where(categories.c.user_id == user_id)
                .order_by(categories.c.created_at.desc())
            )
            return [Category(**row._mapping) for row in result]

    async def delete(self, category_id: str, user_id: str) -> bool:
        """Delete a category together with its entries."""
        categories, entries = self.db.categories, self.db.entries
        async with self.db.engine.begin() as conn:
            await conn.execute(
                delete(entries).where(entries.c.category_id == category_id, entries.c.user_id == user_id)
            )
            result = await conn.execute(
                delete(categories).where(categories.c.id == category_id, categories.c.user_id == user_id)
            )
            return result.rowcount > 0
