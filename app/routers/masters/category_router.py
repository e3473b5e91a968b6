# app/routers/masters/category_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.masters.category_schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryPatch,
    CategoryOut,
)
from app.services.masters.category_service import (
    create_category,
    list_categories,
    update_category,
    patch_category,
    delete_category,
)
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=APIResponse[list[CategoryOut]])
async def list_categories_api(db: AsyncSession = Depends(get_db)):
    categories = await list_categories(db)
    return success_response("Categories fetched successfully", categories)


@router.post("", response_model=APIResponse[CategoryOut], status_code=201)
async def create_category_api(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db),
):
    category = await create_category(db, payload)
    return success_response("Category created successfully", category)


@router.put("/{category_id}", response_model=APIResponse[CategoryOut])
async def update_category_api(
    category_id: int,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
):
    category = await update_category(db, category_id, payload)
    return success_response("Category updated successfully", category)


@router.patch("/{category_id}", response_model=APIResponse[CategoryOut])
async def patch_category_api(
    category_id: int,
    payload: CategoryPatch,
    db: AsyncSession = Depends(get_db),
):
    category = await patch_category(db, category_id, payload)
    return success_response("Category updated successfully", category)


@router.delete("/{category_id}", response_model=APIResponse[None])
async def delete_category_api(category_id: int, db: AsyncSession = Depends(get_db)):
    await delete_category(db, category_id)
    return success_response("Category deleted successfully")
