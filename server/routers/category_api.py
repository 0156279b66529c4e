from fastapi import APIRouter, Body, Path, status
from typing import List

from shamiri.models.journal import Category
from shamiri.models.schema import CategoryCreate
from shamiri.services.category_service import CategoryService
from server.dependencies import CurrentUserDep, DatabaseDep
from server.logging_config import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/categories")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Category)
async def create_category(user: CurrentUserDep, db: DatabaseDep, data: CategoryCreate = Body(...)):
    logger.info(f"Creating category for user: {user.id}")
    return await CategoryService(db).create_category(user.id, data)


@router.get("", response_model=List[Category])
async def list_categories(user: CurrentUserDep, db: DatabaseDep):
    return await CategoryService(db).list_categories(user.id)


@router.get("/{category_id}", response_model=Category)
async def get_category(user: CurrentUserDep, db: DatabaseDep, category_id: str = Path(...)):
    return await CategoryService(db).get_category(user.id, category_id)


@router.delete("/{category_id}")
async def delete_category(user: CurrentUserDep, db: DatabaseDep, category_id: str = Path(...)):
    await CategoryService(db).delete_category(user.id, category_id)
    return {"success": True}
