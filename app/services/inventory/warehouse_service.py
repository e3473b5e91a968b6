# app/services/inventory/warehouse_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.models.inventory.warehouse_models import Warehouse
from app.models.inventory.warehouse_inventory_models import WarehouseInventory
from app.schemas.inventory.warehouse_schemas import (
    WarehouseCreate,
    WarehouseUpdate,
    WarehousePatch,
    WarehouseOut,
)
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _map_warehouse(warehouse: Warehouse) -> WarehouseOut:
    return WarehouseOut(
        id=warehouse.id,
        name=warehouse.name,
        location=warehouse.location,
        max_capacity=warehouse.max_capacity,
        current_capacity=warehouse.current_capacity,
        available_capacity=warehouse.available_capacity,
        created_at=warehouse.created_at,
        updated_at=warehouse.updated_at,
    )


# ---------------- LOOKUP ----------------
async def get_warehouse_or_404(
    db: AsyncSession,
    warehouse_id: int,
    *,
    for_update: bool = False,
) -> Warehouse:
    """Load a warehouse, optionally locking its row until the transaction ends.

    Capacity checks must read the locked row, so ``populate_existing`` forces a
    reload even when the session already holds the instance.
    """
    stmt = select(Warehouse).where(Warehouse.id == warehouse_id)
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)

    warehouse = await db.scalar(stmt)
    if not warehouse:
        raise AppException(
            404,
            f"Warehouse not found with ID: {warehouse_id}",
            ErrorCode.WAREHOUSE_NOT_FOUND,
        )
    return warehouse


async def _ensure_name_available(db: AsyncSession, name: str, exclude_id: int | None = None):
    stmt = select(Warehouse.id).where(Warehouse.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Warehouse.id != exclude_id)

    if await db.scalar(stmt):
        raise AppException(
            409,
            "Warehouse name already exists",
            ErrorCode.WAREHOUSE_NAME_EXISTS,
        )


async def _commit_or_conflict(db: AsyncSession):
    try:
        await db.commit()
    except IntegrityError:
        # race-condition safety net for the unique name
        await db.rollback()
        raise AppException(
            409,
            "Warehouse name already exists",
            ErrorCode.WAREHOUSE_NAME_EXISTS,
        )


# ---------------- LIST / GET ----------------
async def list_warehouses(db: AsyncSession) -> list[WarehouseOut]:
    result = await db.execute(select(Warehouse).order_by(Warehouse.id.asc()))
    return [_map_warehouse(w) for w in result.scalars().all()]


async def get_warehouse(db: AsyncSession, warehouse_id: int) -> WarehouseOut:
    return _map_warehouse(await get_warehouse_or_404(db, warehouse_id))


# ---------------- CREATE ----------------
async def create_warehouse(db: AsyncSession, payload: WarehouseCreate) -> WarehouseOut:
    logger.info("Create warehouse", extra={"warehouse_name": payload.name})

    await _ensure_name_available(db, payload.name)

    warehouse = Warehouse(
        name=payload.name,
        location=payload.location,
        max_capacity=payload.max_capacity,
        current_capacity=0,
    )
    db.add(warehouse)

    await _commit_or_conflict(db)
    await db.refresh(warehouse)
    return _map_warehouse(warehouse)


# ---------------- UPDATE ----------------
async def _apply_changes(
    db: AsyncSession,
    warehouse: Warehouse,
    *,
    name: str | None,
    location: str | None,
    max_capacity: int | None,
) -> WarehouseOut:
    if name is not None and name != warehouse.name:
        await _ensure_name_available(db, name, exclude_id=warehouse.id)
        warehouse.name = name

    if location is not None:
        warehouse.location = location

    if max_capacity is not None:
        if max_capacity < warehouse.current_capacity:
            raise AppException(
                409,
                "Maximum capacity cannot be lower than the capacity already in use",
                ErrorCode.WAREHOUSE_CAPACITY_BELOW_USAGE,
                {
                    "current_capacity": warehouse.current_capacity,
                    "requested_max_capacity": max_capacity,
                },
            )
        warehouse.max_capacity = max_capacity

    await _commit_or_conflict(db)
    await db.refresh(warehouse)
    return _map_warehouse(warehouse)


async def update_warehouse(
    db: AsyncSession,
    warehouse_id: int,
    payload: WarehouseUpdate,
) -> WarehouseOut:
    warehouse = await get_warehouse_or_404(db, warehouse_id, for_update=True)
    logger.info("Update warehouse", extra={"warehouse_id": warehouse_id})

    return await _apply_changes(
        db,
        warehouse,
        name=payload.name,
        location=payload.location,
        max_capacity=payload.max_capacity,
    )


async def patch_warehouse(
    db: AsyncSession,
    warehouse_id: int,
    payload: WarehousePatch,
) -> WarehouseOut:
    warehouse = await get_warehouse_or_404(db, warehouse_id, for_update=True)

    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise AppException(
            400,
            "No changes detected",
            ErrorCode.VALIDATION_ERROR,
        )

    # every warehouse column is required
    cleared = sorted(field for field, value in updates.items() if value is None)
    if cleared:
        raise AppException(
            400,
            "Fields cannot be null",
            ErrorCode.VALIDATION_ERROR,
            {"fields": cleared},
        )

    logger.info(
        "Patch warehouse",
        extra={"warehouse_id": warehouse_id, "fields": sorted(updates)},
    )

    return await _apply_changes(
        db,
        warehouse,
        name=updates.get("name"),
        location=updates.get("location"),
        max_capacity=updates.get("max_capacity"),
    )


# ---------------- DELETE ----------------
async def delete_warehouse(db: AsyncSession, warehouse_id: int) -> None:
    warehouse = await get_warehouse_or_404(db, warehouse_id, for_update=True)

    stocked = await db.scalar(
        select(WarehouseInventory.id)
        .where(WarehouseInventory.warehouse_id == warehouse_id)
        .limit(1)
    )
    if stocked:
        raise AppException(
            409,
            "Warehouse still holds inventory",
            ErrorCode.WAREHOUSE_NOT_EMPTY,
        )

    await db.delete(warehouse)
    await db.commit()

    logger.info("Deleted warehouse", extra={"warehouse_id": warehouse_id})
