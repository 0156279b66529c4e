"""Category management service."""

from typing import List, Optional
import uuid

from shamiri.core.category_store import CategoryStore
from shamiri.core.database import Database
from shamiri.errors import NotFoundError
from shamiri.llm.rate_limiter import CreationRateLimiter, get_creation_rate_limiter
from shamiri.models.journal import Category, utc_now
from shamiri.models.schema import CategoryCreate
from server.logging_config import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, db: Database, rate_limiter: Optional[CreationRateLimiter] = None):
        self.store = CategoryStore(db)
        self.rate_limiter = rate_limiter or get_creation_rate_limiter()

    async def create_category(self, user_id: str, data: CategoryCreate) -> Category:
        await self.rate_limiter.check(user_id)

        now = utc_now()
        category = Category(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=data.name.strip(),
            description=data.description,
            created_at=now,
            updated_at=now,
        )
        await self.store.create(category)
        logger.info(f"Category {category.id} created for user {user_id}")
        return category

    async def list_categories(self, user_id: str) -> List[Category]:
        return await self.store.list_for_user(user_id)

    async def get_category(self, user_id: str, category_id: str) -> Category:
        category = await self.store.get_owned(category_id, user_id)
        if category is None:
            raise NotFoundError("category")
        return category

    async def delete_category(self, user_id: str, category_id: str) -> None:
        """Delete a category and every entry filed under it."""
        if not await self.store.delete(category_id, user_id):
            raise NotFoundError("category")
        logger.info(f"Category {category_id} deleted for user {user_id}")
