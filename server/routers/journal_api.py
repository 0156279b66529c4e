from datetime import date
from fastapi import APIRouter, Body, Path, Query, status
from typing import List, Optional

from shamiri.errors import UpstreamError
from shamiri.models.journal import Draft, JournalEntry
from shamiri.models.moods import Mood, list_moods
from shamiri.models.schema import (
    AskEntryRequest,
    AskEntryResponse,
    DraftSave,
    EntryCreate,
    EntryFilters,
    EntryUpdate,
)
from shamiri.services.ask_service import AskService
from shamiri.services.draft_service import DraftService
from shamiri.services.entry_service import EntryService
from server.config import config
from server.dependencies import CurrentUserDep, DatabaseDep
from server.logging_config import get_logger


logger = get_logger(__name__)

router = APIRouter()


@router.get("/version")
def get_version():
    return {"version": config.INFO.version}


@router.get("/moods", response_model=List[Mood])
def get_moods():
    return list_moods()


# --- Ask AI ---


@router.post("/entries/{entry_id}/ask", response_model=AskEntryResponse)
async def ask_about_entry(
    user: CurrentUserDep,
    db: DatabaseDep,
    entry_id: str = Path(..., description="The entry the conversation is about"),
    data: AskEntryRequest = Body(...),
):
    try:
        answer = await AskService(db).ask_about_entry(user.id, entry_id, data)
    except UpstreamError as e:
        # Full provider detail stays in the logs
        logger.error(f"Ask failed for entry {entry_id}: {e}")
        raise
    return AskEntryResponse(answer=answer)


# --- Entries ---


@router.post("/entries", status_code=status.HTTP_201_CREATED, response_model=JournalEntry)
async def create_entry(user: CurrentUserDep, db: DatabaseDep, data: EntryCreate = Body(...)):
    logger.info(f"Creating entry for user: {user.id}")
    return await EntryService(db).create_entry(user.id, data)


@router.get("/entries", response_model=List[JournalEntry])
async def list_entries(
    user: CurrentUserDep,
    db: DatabaseDep,
    category_id: Optional[str] = Query(None, description="Category id, or 'unorganized'"),
    mood: Optional[str] = Query(None, description="Mood code"),
    search: Optional[str] = Query(None, description="Matches title or content"),
    on_date: Optional[date] = Query(None, alias="date", description="Creation date (UTC)"),
):
    filters = EntryFilters(category_id=category_id, mood=mood, search=search, on_date=on_date)
    return await EntryService(db).list_entries(user.id, filters)


@router.get("/entries/{entry_id}", response_model=JournalEntry)
async def get_entry(user: CurrentUserDep, db: DatabaseDep, entry_id: str = Path(...)):
    return await EntryService(db).get_entry(user.id, entry_id)


@router.put("/entries/{entry_id}", response_model=JournalEntry)
async def update_entry(
    user: CurrentUserDep,
    db: DatabaseDep,
    entry_id: str = Path(...),
    data: EntryUpdate = Body(...),
):
    return await EntryService(db).update_entry(user.id, entry_id, data)


@router.delete("/entries/{entry_id}")
async def delete_entry(user: CurrentUserDep, db: DatabaseDep, entry_id: str = Path(...)):
    await EntryService(db).delete_entry(user.id, entry_id)
    return {"success": True}


# --- Drafts ---


@router.get("/drafts", response_model=Optional[Draft])
async def get_draft(user: CurrentUserDep, db: DatabaseDep):
    """The saved draft, or null when there is none."""
    return await DraftService(db).get_draft(user.id)


@router.put("/drafts", response_model=Draft)
async def save_draft(user: CurrentUserDep, db: DatabaseDep, data: DraftSave = Body(...)):
    return await DraftService(db).save_draft(user.id, data)
