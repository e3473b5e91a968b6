# app/services/masters/category_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from app.models.masters.category_models import Category
from app.schemas.masters.category_schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryPatch,
    CategoryOut,
)
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _map_category(category: Category) -> CategoryOut:
    return CategoryOut(
        id=category.id,
        name=category.name,
        description=category.description,
    )


async def get_category_or_404(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if not category:
        raise AppException(
            404,
            f"Category not found with ID: {category_id}",
            ErrorCode.CATEGORY_NOT_FOUND,
        )
    return category


async def _ensure_name_available(db: AsyncSession, name: str, exclude_id: int | None = None):
    stmt = select(Category.id).where(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)

    if await db.scalar(stmt):
        raise AppException(
            409,
            "Category already exists",
            ErrorCode.CATEGORY_NAME_EXISTS,
        )


async def _commit_or_conflict(db: AsyncSession):
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "Category already exists",
            ErrorCode.CATEGORY_NAME_EXISTS,
        )


# ---------------- CREATE ----------------
async def create_category(db: AsyncSession, payload: CategoryCreate) -> CategoryOut:
    await _ensure_name_available(db, payload.name)

    category = Category(name=payload.name, description=payload.description)
    db.add(category)

    await _commit_or_conflict(db)
    await db.refresh(category)

    logger.info("Created category", extra={"category_id": category.id})
    return _map_category(category)


# ---------------- LIST ----------------
async def list_categories(db: AsyncSession) -> list[CategoryOut]:
    result = await db.execute(select(Category).order_by(Category.name.asc()))
    return [_map_category(c) for c in result.scalars().all()]


# ---------------- UPDATE ----------------
async def update_category(
    db: AsyncSession,
    category_id: int,
    payload: CategoryUpdate,
) -> CategoryOut:
    category = await get_category_or_404(db, category_id)

    if payload.name.lower() != category.name.lower():
        await _ensure_name_available(db, payload.name, exclude_id=category_id)

    category.name = payload.name
    category.description = payload.description

    await _commit_or_conflict(db)
    await db.refresh(category)
    return _map_category(category)


async def patch_category(
    db: AsyncSession,
    category_id: int,
    payload: CategoryPatch,
) -> CategoryOut:
    category = await get_category_or_404(db, category_id)

    updates = payload.model_dump(exclude_unset=True)

    if "name" in updates:
        if updates["name"] is None:
            raise AppException(
                400,
                "Category name cannot be null",
                ErrorCode.VALIDATION_ERROR,
            )
        if updates["name"].lower() != category.name.lower():
            await _ensure_name_available(db, updates["name"], exclude_id=category_id)
        category.name = updates["name"]

    if "description" in updates:
        category.description = updates["description"]

    await _commit_or_conflict(db)
    await db.refresh(category)
    return _map_category(category)


# ---------------- DELETE ----------------
async def delete_category(db: AsyncSession, category_id: int) -> None:
    category = await get_category_or_404(db, category_id)

    await db.delete(category)
    await db.commit()

    logger.info("Deleted category", extra={"category_id": category_id})
