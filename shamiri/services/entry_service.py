"""Journal entry management service."""

from typing import List, Optional
import uuid

from shamiri.core.category_store import CategoryStore
from shamiri.core.database import Database
from shamiri.core.draft_store import DraftStore
from shamiri.core.entry_store import EntryStore
from shamiri.errors import NotFoundError, ValidationError
from shamiri.llm.rate_limiter import CreationRateLimiter, get_creation_rate_limiter
from shamiri.models.journal import JournalEntry, utc_now
from shamiri.models.moods import Mood, get_mood_by_id
from shamiri.models.schema import EntryCreate, EntryFilters, EntryUpdate
from shamiri.services.image_service import ImageService
from server.logging_config import get_logger

logger = get_logger(__name__)

UNORGANIZED = "unorganized"


def _require_mood(code: str) -> Mood:
    mood = get_mood_by_id(code)
    if mood is None:
        raise ValidationError("Invalid mood", {"field": "mood", "value": code})
    return mood


class EntryService:
    def __init__(
        self,
        db: Database,
        image_service: Optional[ImageService] = None,
        rate_limiter: Optional[CreationRateLimiter] = None,
    ):
        self.entries = EntryStore(db)
        self.categories = CategoryStore(db)
        self.drafts = DraftStore(db)
        self.image_service = image_service or ImageService()
        self.rate_limiter = rate_limiter or get_creation_rate_limiter()

    async def _require_category(self, category_id: Optional[str], user_id: str) -> None:
        if category_id and await self.categories.get_owned(category_id, user_id) is None:
            raise NotFoundError("category")

    async def create_entry(self, user_id: str, data: EntryCreate) -> JournalEntry:
        """
        Create an entry for ``user_id``. Saving an entry discards the user's draft.

        Raises:
            RateLimitError: the user's creation bucket is empty
            ValidationError: unknown mood code
            NotFoundError: the category is missing or not the user's
        """
        await self.rate_limiter.check(user_id)

        mood = _require_mood(data.mood)
        category_id = data.category_id or None
        await self._require_category(category_id, user_id)

        mood_image_url = await self.image_service.find_mood_image(mood.image_query)

        now = utc_now()
        entry = JournalEntry(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=data.title,
            content=data.content,
            mood=mood.id,
            mood_score=mood.score,
            mood_image_url=mood_image_url,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        await self.entries.create(entry)
        await self.drafts.delete_for_user(user_id)

        logger.info(f"Entry {entry.id} created for user {user_id}")
        return entry

    async def get_entry(self, user_id: str, entry_id: str) -> JournalEntry:
        entry = await self.entries.get_owned(entry_id, user_id)
        if entry is None:
            raise NotFoundError("entry")

        entry.mood_data = get_mood_by_id(entry.mood)
        if entry.category_id:
            entry.category = await self.categories.get_owned(entry.category_id, user_id)
        return entry

    async def list_entries(self, user_id: str, filters: Optional[EntryFilters] = None) -> List[JournalEntry]:
        filters = filters or EntryFilters()
        unorganized = filters.category_id == UNORGANIZED
        mood = _require_mood(filters.mood).id if filters.mood else None

        entries = await self.entries.list_for_user(
            user_id,
            category_id=None if unorganized else filters.category_id,
            unorganized=unorganized,
            mood=mood,
            search=filters.search.strip() if filters.search and filters.search.strip() else None,
            on_date=filters.on_date,
        )
        for entry in entries:
            entry.mood_data = get_mood_by_id(entry.mood)
        return entries

    async def update_entry(self, user_id: str, entry_id: str, data: EntryUpdate) -> JournalEntry:
        changes = data.model_dump(exclude_unset=True)

        if "mood" in changes:
            if changes["mood"] is None:
                raise ValidationError("Invalid mood", {"field": "mood", "value": None})
            mood = _require_mood(changes["mood"])
            changes["mood"] = mood.id
            changes["mood_score"] = mood.score
            if await self.entries.get_owned(entry_id, user_id) is None:
                raise NotFoundError("entry")
            changes["mood_image_url"] = await self.image_service.find_mood_image(mood.image_query)

        for field_name in ("title", "content"):
            if field_name in changes and changes[field_name] is None:
                raise ValidationError(f"{field_name.capitalize()} cannot be empty", {"field": field_name})

        if "category_id" in changes:
            changes["category_id"] = changes["category_id"] or None
            await self._require_category(changes["category_id"], user_id)

        entry = await self.entries.update(entry_id, user_id, changes)
        if entry is None:
            raise NotFoundError("entry")

        logger.info(f"Entry {entry_id} updated for user {user_id}")
        return entry

    async def delete_entry(self, user_id: str, entry_id: str) -> None:
        if not await self.entries.delete(entry_id, user_id):
            raise NotFoundError("entry")
        logger.info(f"Entry {entry_id} deleted for user {user_id}")
