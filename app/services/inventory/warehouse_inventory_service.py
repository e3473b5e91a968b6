# app/services/inventory/warehouse_inventory_service.py

"""
Inventory placement and transfer engine.

Rules enforced here:
- a product is stocked in at most one warehouse system-wide
- 0 <= current_capacity <= max_capacity for every warehouse
- every mutation (add, delete, transfer) commits once; any failure before the
  commit leaves the session uncommitted and nothing becomes visible

Warehouses are read with SELECT ... FOR UPDATE before their capacity is
checked, so the check and the write see the same row version. Add and
transfer lock the product row before any warehouse; soft delete locks the same
row, so it waits for an in-flight placement and then sees its inventory row.
"""

from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from app.models.inventory.warehouse_models import Warehouse
from app.models.inventory.warehouse_inventory_models import WarehouseInventory
from app.models.inventory.inventory_transfer_models import InventoryTransfer
from app.models.masters.product_models import Product

from app.schemas.inventory.warehouse_inventory_schemas import (
    WarehouseInventoryCreate,
    WarehouseInventoryOut,
    WarehouseInventoryByWarehouse,
    WarehouseMini,
)
from app.schemas.inventory.inventory_transfer_schemas import InventoryTransferCreate

from app.services.inventory.warehouse_service import get_warehouse_or_404
from app.services.masters.product_service import get_active_product_or_404, map_product

from app.core.exceptions import AppException, InventoryInvariantError
from app.constants.error_codes import ErrorCode
from app.utils.logger import get_logger

logger = get_logger(__name__)


# =====================================================
# MAPPER
# =====================================================
def _map_inventory(
    inventory: WarehouseInventory,
    product: Product,
    warehouse: Warehouse,
) -> WarehouseInventoryOut:
    return WarehouseInventoryOut(
        id=inventory.id,
        product_public_id=product.public_id,
        quantity=inventory.quantity,
        storage_location=inventory.storage_location,
        expiration_date=inventory.expiration_date,
        warehouse=WarehouseMini(
            id=warehouse.id,
            name=warehouse.name,
            location=warehouse.location,
        ),
        product=map_product(product),
        created_at=inventory.created_at,
        updated_at=inventory.updated_at,
    )


# =====================================================
# HELPERS
# =====================================================
def check_warehouse_capacity(warehouse: Warehouse, additional_quantity: int) -> None:
    new_capacity = warehouse.current_capacity + additional_quantity
    if new_capacity > warehouse.max_capacity:
        raise AppException(
            409,
            f"Warehouse capacity exceeded. Max: {warehouse.max_capacity}, "
            f"Requested New Capacity: {new_capacity}",
            ErrorCode.WAREHOUSE_CAPACITY_EXCEEDED,
            {
                "warehouse_id": warehouse.id,
                "max_capacity": warehouse.max_capacity,
                "current_capacity": warehouse.current_capacity,
                "requested_quantity": additional_quantity,
            },
        )


def _release_capacity(warehouse: Warehouse, quantity: int) -> None:
    new_capacity = warehouse.current_capacity - quantity
    if new_capacity < 0:
        logger.error(
            "Warehouse capacity would become negative",
            extra={
                "warehouse_id": warehouse.id,
                "current_capacity": warehouse.current_capacity,
                "released_quantity": quantity,
            },
        )
        raise InventoryInvariantError(
            "Warehouse capacity would become negative; inconsistent data",
            {
                "warehouse_id": warehouse.id,
                "current_capacity": warehouse.current_capacity,
                "released_quantity": quantity,
            },
        )
    warehouse.current_capacity = new_capacity


async def find_inventory_for_product(
    db: AsyncSession,
    product_id: int,
) -> WarehouseInventory | None:
    return await db.scalar(
        select(WarehouseInventory).where(WarehouseInventory.product_id == product_id)
    )


async def _find_inventory(
    db: AsyncSession,
    warehouse_id: int,
    product_id: int,
) -> WarehouseInventory | None:
    return await db.scalar(
        select(WarehouseInventory)
        .where(
            WarehouseInventory.warehouse_id == warehouse_id,
            WarehouseInventory.product_id == product_id,
        )
        .with_for_update()
    )


async def _lock_warehouse_pair(
    db: AsyncSession,
    source_id: int,
    destination_id: int,
) -> tuple[Warehouse, Warehouse]:
    # ascending id order so opposing transfers cannot deadlock
    locked = {}
    for warehouse_id in sorted((source_id, destination_id)):
        locked[warehouse_id] = await get_warehouse_or_404(
            db, warehouse_id, for_update=True
        )
    return locked[source_id], locked[destination_id]


def _active_inventory_query():
    """Inventory rows joined to product and warehouse; soft-deleted products excluded."""
    return (
        select(WarehouseInventory, Product, Warehouse)
        .join(Product, WarehouseInventory.product_id == Product.id)
        .join(Warehouse, WarehouseInventory.warehouse_id == Warehouse.id)
        .where(Product.is_deleted.is_(False))
    )


async def _fetch_items(db: AsyncSession, stmt) -> list[WarehouseInventoryOut]:
    result = await db.execute(stmt)
    return [
        _map_inventory(inventory, product, warehouse)
        for inventory, product, warehouse in result.all()
    ]


# =====================================================
# ADD PRODUCT TO WAREHOUSE
# =====================================================
async def add_product_to_warehouse(
    db: AsyncSession,
    warehouse_id: int,
    payload: WarehouseInventoryCreate,
) -> WarehouseInventoryOut:
    # product row first, then warehouse: the same lock order as transfers
    product = await get_active_product_or_404(db, payload.product_public_id, for_update=True)
    warehouse = await get_warehouse_or_404(db, warehouse_id, for_update=True)

    existing = await find_inventory_for_product(db, product.id)
    if existing:
        raise AppException(
            409,
            f"Product is already assigned to warehouse with ID: {existing.warehouse_id}",
            ErrorCode.INVENTORY_PRODUCT_ALREADY_STOCKED,
            {"warehouse_id": existing.warehouse_id},
        )

    check_warehouse_capacity(warehouse, payload.quantity)

    warehouse.current_capacity = warehouse.current_capacity + payload.quantity

    inventory = WarehouseInventory(
        warehouse_id=warehouse.id,
        product_id=product.id,
        quantity=payload.quantity,
        storage_location=payload.storage_location,
        expiration_date=payload.expiration_date,
    )
    db.add(inventory)

    try:
        await db.flush()
    except IntegrityError:
        # a concurrent request stocked the same product first
        await db.rollback()
        raise AppException(
            409,
            "Product is already assigned to another warehouse",
            ErrorCode.INVENTORY_PRODUCT_ALREADY_STOCKED,
        )

    await db.commit()
    await db.refresh(inventory)

    logger.info(
        "Stocked product",
        extra={
            "warehouse_id": warehouse.id,
            "product_public_id": product.public_id,
            "quantity": payload.quantity,
        },
    )

    return _map_inventory(inventory, product, warehouse)


# =====================================================
# DELETE INVENTORY
# =====================================================
async def delete_inventory(
    db: AsyncSession,
    warehouse_id: int,
    product_public_id: str,
) -> None:
    warehouse = await get_warehouse_or_404(db, warehouse_id, for_update=True)
    product = await get_active_product_or_404(db, product_public_id)

    inventory = await _find_inventory(db, warehouse.id, product.id)
    if not inventory:
        raise AppException(
            404,
            "Product not found in this warehouse inventory",
            ErrorCode.INVENTORY_NOT_FOUND,
        )

    quantity = inventory.quantity
    _release_capacity(warehouse, quantity)

    await db.delete(inventory)
    await db.commit()

    logger.info(
        "Removed inventory",
        extra={
            "warehouse_id": warehouse.id,
            "product_public_id": product.public_id,
            "quantity": quantity,
        },
    )


# =====================================================
# TRANSFER
# =====================================================
async def transfer_inventory(
    db: AsyncSession,
    payload: InventoryTransferCreate,
) -> None:
    """Move the full stock of a product from one warehouse to another.

    The source row is deleted and a destination row created with the same
    quantity, storage location and expiration date; both capacities and the
    audit record are written in the same commit.
    """
    if payload.source_warehouse_id == payload.destination_warehouse_id:
        raise AppException(
            400,
            "Source and destination warehouses cannot be the same",
            ErrorCode.TRANSFER_SAME_WAREHOUSE,
        )

    product = await get_active_product_or_404(db, payload.product_public_id, for_update=True)
    source, destination = await _lock_warehouse_pair(
        db,
        payload.source_warehouse_id,
        payload.destination_warehouse_id,
    )

    source_inventory = await _find_inventory(db, source.id, product.id)
    if not source_inventory:
        raise AppException(
            404,
            "Product not found in source warehouse",
            ErrorCode.INVENTORY_NOT_FOUND,
        )

    quantity = source_inventory.quantity
    if quantity is None or quantity <= 0:
        raise AppException(
            409,
            "No quantity available to transfer",
            ErrorCode.INVENTORY_INVALID_QUANTITY,
        )

    check_warehouse_capacity(destination, quantity)
    _release_capacity(source, quantity)
    destination.current_capacity = destination.current_capacity + quantity

    storage_location = source_inventory.storage_location
    expiration_date = source_inventory.expiration_date

    await db.delete(source_inventory)

    try:
        # product_id is unique: the source row must be gone before the insert
        await db.flush()

        db.add(
            WarehouseInventory(
                warehouse_id=destination.id,
                product_id=product.id,
                quantity=quantity,
                storage_location=storage_location,
                expiration_date=expiration_date,
            )
        )
        db.add(
            InventoryTransfer(
                product_id=product.id,
                source_warehouse_id=source.id,
                destination_warehouse_id=destination.id,
                quantity=quantity,
                notes=payload.notes,
            )
        )
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "Concurrent inventory update detected",
            ErrorCode.CONFLICT,
        )

    await db.commit()

    logger.info(
        "Transferred inventory",
        extra={
            "product_public_id": product.public_id,
            "source_warehouse_id": source.id,
            "destination_warehouse_id": destination.id,
            "quantity": quantity,
        },
    )


# =====================================================
# READ QUERIES
# =====================================================
async def get_inventory_by_warehouse(
    db: AsyncSession,
    warehouse_id: int,
) -> WarehouseInventoryByWarehouse:
    warehouse = await get_warehouse_or_404(db, warehouse_id)

    items = await _fetch_items(
        db,
        _active_inventory_query()
        .where(WarehouseInventory.warehouse_id == warehouse_id)
        .order_by(Product.name.asc(), WarehouseInventory.id.asc()),
    )

    return WarehouseInventoryByWarehouse(
        warehouse_id=warehouse.id,
        warehouse_name=warehouse.name,
        warehouse_location=warehouse.location,
        items=items,
    )


async def get_all_warehouses_inventory(db: AsyncSession) -> list[WarehouseInventoryOut]:
    return await _fetch_items(
        db,
        _active_inventory_query().order_by(
            Warehouse.id.asc(),
            Product.name.asc(),
            WarehouseInventory.id.asc(),
        ),
    )


# =====================================================
# EXPIRATION ALERTS
# =====================================================
def _validate_alert_days(days: int) -> None:
    if days < 1:
        raise AppException(
            400,
            "days must be at least 1",
            ErrorCode.INVALID_ALERT_DAYS,
        )


async def get_nearing_expiration_alerts(
    db: AsyncSession,
    days: int,
) -> list[WarehouseInventoryOut]:
    _validate_alert_days(days)

    today = date.today()
    threshold = today + timedelta(days=days)

    return await _fetch_items(
        db,
        _active_inventory_query()
        .where(
            WarehouseInventory.expiration_date.isnot(None),
            WarehouseInventory.expiration_date >= today,
            WarehouseInventory.expiration_date <= threshold,
        )
        .order_by(WarehouseInventory.expiration_date.asc(), WarehouseInventory.id.asc()),
    )


async def get_expired_inventory(db: AsyncSession) -> list[WarehouseInventoryOut]:
    today = date.today()

    return await _fetch_items(
        db,
        _active_inventory_query()
        .where(
            WarehouseInventory.expiration_date.isnot(None),
            WarehouseInventory.expiration_date < today,
        )
        .order_by(WarehouseInventory.expiration_date.asc(), WarehouseInventory.id.asc()),
    )


async def summarize_expirations(db: AsyncSession, days: int) -> dict:
    _validate_alert_days(days)

    today = date.today()
    threshold = today + timedelta(days=days)

    base = (
        select(func.count())
        .select_from(WarehouseInventory)
        .join(Product, WarehouseInventory.product_id == Product.id)
        .where(
            Product.is_deleted.is_(False),
            WarehouseInventory.expiration_date.isnot(None),
        )
    )

    expired = await db.scalar(base.where(WarehouseInventory.expiration_date < today))
    expiring = await db.scalar(
        base.where(
            WarehouseInventory.expiration_date >= today,
            WarehouseInventory.expiration_date <= threshold,
        )
    )

    return {
        "expired": expired or 0,
        "expiring": expiring or 0,
    }
