"""
Unit tests for the service layer against an in-memory database
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from shamiri.core.entry_store import EntryStore
from shamiri.errors import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    UpstreamError,
    ValidationError,
)
from shamiri.llm.completion import CompletionInvoker
from shamiri.llm.providers.base import ChatResponse, Role
from shamiri.llm.rate_limiter import CreationRateLimiter
from shamiri.models.journal import utc_now
from shamiri.models.schema import (
    AskEntryRequest,
    CategoryCreate,
    DraftSave,
    EntryCreate,
    EntryFilters,
    EntryUpdate,
)
from shamiri.services.ask_service import AskService
from shamiri.services.category_service import CategoryService
from shamiri.services.draft_service import DraftService
from shamiri.services.entry_service import EntryService
from shamiri.services.user_service import UserService


def _client(*contents):
    client = AsyncMock()
    client.chat = AsyncMock(side_effect=[ChatResponse(content=c, model="test") for c in contents])
    client.get_provider_name = MagicMock(return_value="test")
    return client


class TestAskService:

    @pytest.mark.asyncio
    async def test_answer_about_own_entry(self, db, make_entry):
        entry = await EntryStore(db).create(make_entry("user_a"))
        client = _client("<p>You were calm.</p>")
        service = AskService(db, invoker=CompletionInvoker(client=client))

        answer = await service.ask_about_entry(
            "user_a", entry.id, AskEntryRequest(questions=["What mood was I in?"])
        )

        assert answer == "<p>You were calm.</p>"
        messages = client.chat.await_args.kwargs["messages"]
        assert [m.role for m in messages] == [Role.SYSTEM, Role.USER]
        assert "Felt calm" in messages[0].content
        assert messages[1].content == "What mood was I in?"

    @pytest.mark.asyncio
    async def test_follow_up_carries_history(self, db, make_entry):
        entry = await EntryStore(db).create(make_entry("user_a"))
        client = _client("<p>Because of the sunrise.</p>")
        service = AskService(db, invoker=CompletionInvoker(client=client))

        await service.ask_about_entry(
            "user_a",
            entry.id,
            AskEntryRequest(questions=["Q1", "Q2"], answers=["A1"]),
        )

        messages = client.chat.await_args.kwargs["messages"]
        assert [(m.role, m.content) for m in messages[1:]] == [
            (Role.USER, "Q1"),
            (Role.ASSISTANT, "A1"),
            (Role.USER, "Q2"),
        ]

    @pytest.mark.asyncio
    async def test_answer_is_sanitised(self, db, make_entry):
        entry = await EntryStore(db).create(make_entry("user_a"))
        client = _client('<p onclick="x()">Hi</p><script>alert(1)</script>')
        service = AskService(db, invoker=CompletionInvoker(client=client))

        answer = await service.ask_about_entry("user_a", entry.id, AskEntryRequest(questions=["Q"]))
        assert answer == "<p>Hi</p>"

    @pytest.mark.asyncio
    async def test_answer_empty_after_sanitising_is_upstream_error(self, db, make_entry):
        entry = await EntryStore(db).create(make_entry("user_a"))
        service = AskService(db, invoker=CompletionInvoker(client=_client("<script>x</script>")))

        with pytest.raises(UpstreamError):
            await service.ask_about_entry("user_a", entry.id, AskEntryRequest(questions=["Q"]))

    @pytest.mark.asyncio
    async def test_foreign_entry_is_not_found(self, db, make_entry):
        entry = await EntryStore(db).create(make_entry("user_b"))
        client = _client("<p>never</p>")
        service = AskService(db, invoker=CompletionInvoker(client=client))

        with pytest.raises(NotFoundError):
            await service.ask_about_entry("user_a", entry.id, AskEntryRequest(questions=["Q"]))
        client.chat.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_validation_happens_before_lookup(self, db):
        client = _client("<p>never</p>")
        service = AskService(db, invoker=CompletionInvoker(client=client))

        # Entry does not exist, but the malformed request is reported first
        with pytest.raises(ValidationError):
            await service.ask_about_entry(
                "user_a", "missing", AskEntryRequest(questions=["Q1"], answers=["A1", "A2"])
            )
        client.chat.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retry_after_failure_sends_same_messages(self, db, make_entry):
        entry = await EntryStore(db).create(make_entry("user_a"))
        client = AsyncMock()
        client.get_provider_name = MagicMock(return_value="test")
        client.chat = AsyncMock(side_effect=[
            UpstreamError("test", "timeout"),
            ChatResponse(content="<p>Second try</p>", model="test"),
        ])
        service = AskService(db, invoker=CompletionInvoker(client=client))
        request = AskEntryRequest(questions=["Q1", "Q2"], answers=["A1"])

        with pytest.raises(UpstreamError):
            await service.ask_about_entry("user_a", entry.id, request)
        assert await service.ask_about_entry("user_a", entry.id, request) == "<p>Second try</p>"

        first, second = client.chat.await_args_list
        assert first.kwargs["messages"] == second.kwargs["messages"]
        assert request.questions == ["Q1", "Q2"]
        assert request.answers == ["A1"]

    @pytest.mark.asyncio
    async def test_default_invoker_uses_shared_client(self, db, make_entry, mock_chat_client):
        entry = await EntryStore(db).create(make_entry("user_a"))

        answer = await AskService(db).ask_about_entry("user_a", entry.id, AskEntryRequest(questions=["Q"]))

        assert answer == "<p>This is a mocked answer about your entry.</p>"
        mock_chat_client.chat.assert_awaited_once()


class TestEntryService:

    @pytest.mark.asyncio
    async def test_create_entry_sets_mood_score_and_clears_draft(self, db):
        await DraftService(db).save_draft("user_a", DraftSave(title="half", content="written"))
        service = EntryService(db)

        entry = await service.create_entry(
            "user_a", EntryCreate(title="Evening", content="Long walk", mood="calm")
        )

        assert entry.mood == "CALM"
        assert entry.mood_score == 8
        assert entry.mood_image_url is None
        assert await DraftService(db).get_draft("user_a") is None

    @pytest.mark.asyncio
    async def test_create_entry_invalid_mood(self, db):
        with pytest.raises(ValidationError, match="Invalid mood"):
            await EntryService(db).create_entry(
                "user_a", EntryCreate(title="t", content="c", mood="WISTFUL")
            )

    @pytest.mark.asyncio
    async def test_create_entry_in_foreign_category(self, db):
        category = await CategoryService(db).create_category("user_b", CategoryCreate(name="Work"))

        with pytest.raises(NotFoundError):
            await EntryService(db).create_entry(
                "user_a", EntryCreate(title="t", content="c", mood="CALM", category_id=category.id)
            )

    @pytest.mark.asyncio
    async def test_create_entry_fetches_mood_image(self, db):
        image_service = MagicMock()
        image_service.find_mood_image = AsyncMock(return_value="https://img.test/calm.png")
        service = EntryService(db, image_service=image_service)

        entry = await service.create_entry("user_a", EntryCreate(title="t", content="c", mood="CALM"))

        assert entry.mood_image_url == "https://img.test/calm.png"
        image_service.find_mood_image.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_entry_rate_limited(self, db):
        service = EntryService(db, rate_limiter=CreationRateLimiter(capacity=1, refill_per_hour=10))
        await service.create_entry("user_a", EntryCreate(title="t", content="c", mood="CALM"))

        with pytest.raises(RateLimitError):
            await service.create_entry("user_a", EntryCreate(title="t2", content="c2", mood="CALM"))

    @pytest.mark.asyncio
    async def test_get_entry_populates_mood_and_category(self, db):
        category = await CategoryService(db).create_category("user_a", CategoryCreate(name="Home"))
        service = EntryService(db)
        created = await service.create_entry(
            "user_a", EntryCreate(title="t", content="c", mood="HAPPY", category_id=category.id)
        )

        entry = await service.get_entry("user_a", created.id)

        assert entry.mood_data.id == "HAPPY"
        assert entry.category.name == "Home"

    @pytest.mark.asyncio
    async def test_get_foreign_entry_not_found(self, db):
        created = await EntryService(db).create_entry(
            "user_b", EntryCreate(title="t", content="c", mood="CALM")
        )
        with pytest.raises(NotFoundError):
            await EntryService(db).get_entry("user_a", created.id)

    @pytest.mark.asyncio
    async def test_list_filters(self, db):
        service = EntryService(db)
        work = await CategoryService(db).create_category("user_a", CategoryCreate(name="Work"))
        await service.create_entry(
            "user_a", EntryCreate(title="Standup", content="Sprint planning", mood="TIRED", category_id=work.id)
        )
        await service.create_entry("user_a", EntryCreate(title="Park", content="Sunny walk", mood="HAPPY"))
        await service.create_entry("user_b", EntryCreate(title="Other", content="Sunny too", mood="HAPPY"))

        everything = await service.list_entries("user_a")
        assert {e.title for e in everything} == {"Standup", "Park"}
        # Newest first
        assert everything[0].title == "Park"

        by_category = await service.list_entries("user_a", EntryFilters(category_id=work.id))
        assert [e.title for e in by_category] == ["Standup"]

        unorganized = await service.list_entries("user_a", EntryFilters(category_id="unorganized"))
        assert [e.title for e in unorganized] == ["Park"]

        by_mood = await service.list_entries("user_a", EntryFilters(mood="tired"))
        assert [e.title for e in by_mood] == ["Standup"]

        by_search = await service.list_entries("user_a", EntryFilters(search="SUNNY"))
        assert [e.title for e in by_search] == ["Park"]

        today = await service.list_entries("user_a", EntryFilters(on_date=utc_now().date()))
        assert len(today) == 2

    @pytest.mark.asyncio
    async def test_list_with_invalid_mood(self, db):
        with pytest.raises(ValidationError):
            await EntryService(db).list_entries("user_a", EntryFilters(mood="WISTFUL"))

    @pytest.mark.asyncio
    async def test_update_entry_changes_mood_score(self, db):
        service = EntryService(db)
        created = await service.create_entry("user_a", EntryCreate(title="t", content="c", mood="CALM"))

        updated = await service.update_entry("user_a", created.id, EntryUpdate(mood="SAD", title="New"))

        assert updated.mood == "SAD"
        assert updated.mood_score != created.mood_score
        assert updated.title == "New"
        assert updated.content == "c"
        assert updated.updated_at >= created.updated_at

    @pytest.mark.asyncio
    async def test_update_foreign_entry_not_found(self, db):
        created = await EntryService(db).create_entry(
            "user_b", EntryCreate(title="t", content="c", mood="CALM")
        )
        with pytest.raises(NotFoundError):
            await EntryService(db).update_entry("user_a", created.id, EntryUpdate(title="mine"))

    @pytest.mark.asyncio
    async def test_delete_entry(self, db):
        service = EntryService(db)
        created = await service.create_entry("user_a", EntryCreate(title="t", content="c", mood="CALM"))

        with pytest.raises(NotFoundError):
            await service.delete_entry("user_b", created.id)

        await service.delete_entry("user_a", created.id)
        with pytest.raises(NotFoundError):
            await service.get_entry("user_a", created.id)


class TestCategoryService:

    @pytest.mark.asyncio
    async def test_create_and_list(self, db):
        service = CategoryService(db)
        await service.create_category("user_a", CategoryCreate(name="  Work  "))
        await service.create_category("user_b", CategoryCreate(name="Other"))

        categories = await service.list_categories("user_a")
        assert [c.name for c in categories] == ["Work"]

    @pytest.mark.asyncio
    async def test_delete_removes_entries(self, db):
        category = await CategoryService(db).create_category("user_a", CategoryCreate(name="Work"))
        entries = EntryService(db)
        filed = await entries.create_entry(
            "user_a", EntryCreate(title="t", content="c", mood="CALM", category_id=category.id)
        )
        loose = await entries.create_entry("user_a", EntryCreate(title="u", content="c", mood="CALM"))

        await CategoryService(db).delete_category("user_a", category.id)

        with pytest.raises(NotFoundError):
            await entries.get_entry("user_a", filed.id)
        assert (await entries.get_entry("user_a", loose.id)).id == loose.id
        with pytest.raises(NotFoundError):
            await CategoryService(db).get_category("user_a", category.id)

    @pytest.mark.asyncio
    async def test_delete_foreign_category_not_found(self, db):
        category = await CategoryService(db).create_category("user_b", CategoryCreate(name="Work"))
        with pytest.raises(NotFoundError):
            await CategoryService(db).delete_category("user_a", category.id)


class TestDraftService:

    @pytest.mark.asyncio
    async def test_save_overwrites(self, db):
        service = DraftService(db)
        assert await service.get_draft("user_a") is None

        await service.save_draft("user_a", DraftSave(title="first"))
        draft = await service.save_draft("user_a", DraftSave(title="second", content="body", mood="hopeful"))

        assert draft.title == "second"
        assert draft.content == "body"
        assert draft.mood == "HOPEFUL"

    @pytest.mark.asyncio
    async def test_invalid_mood(self, db):
        with pytest.raises(ValidationError):
            await DraftService(db).save_draft("user_a", DraftSave(mood="WISTFUL"))


class TestUserService:

    @pytest.mark.asyncio
    async def test_resolve_creates_once(self, db):
        service = UserService(db)
        first = await service.resolve("auth|123")
        second = await service.resolve("auth|123")

        assert first.id == second.id
        assert first.auth_user_id == "auth|123"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("principal", [None, "", "   "])
    async def test_missing_principal(self, db, principal):
        with pytest.raises(AuthenticationError):
            await UserService(db).resolve(principal)


class TestTimestamps:

    def test_utc_now_is_naive_utc(self):
        now = utc_now()
        assert now.tzinfo is None
        assert abs(now - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(seconds=5)

    @pytest.mark.asyncio
    async def test_stored_timestamps_are_naive_utc(self, db):
        before = utc_now()
        entry = await EntryService(db).create_entry("user_a", EntryCreate(title="t", content="c", mood="CALM"))
        draft = await DraftService(db).save_draft("user_a", DraftSave(title="d"))

        for value in (entry.created_at, entry.updated_at, draft.updated_at):
            assert value.tzinfo is None
            assert value >= before
