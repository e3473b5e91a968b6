from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.response import success_response, APIResponse

from app.schemas.inventory.warehouse_inventory_schemas import (
    WarehouseInventoryCreate,
    WarehouseInventoryOut,
    WarehouseInventoryByWarehouse,
)
from app.schemas.inventory.inventory_transfer_schemas import (
    InventoryTransferCreate,
    InventoryTransferListData,
)

from app.services.inventory.warehouse_inventory_service import (
    add_product_to_warehouse,
    delete_inventory,
    transfer_inventory,
    get_inventory_by_warehouse,
    get_all_warehouses_inventory,
    get_nearing_expiration_alerts,
    get_expired_inventory,
)
from app.services.inventory.inventory_transfer_service import list_inventory_transfers

router = APIRouter(
    prefix="/warehouses/inventory",
    tags=["Warehouse Inventory"],
)


# Static paths are declared before /{warehouse_id} so they are matched first.

# =========================
# LIST ALL
# =========================
@router.get("", response_model=APIResponse[list[WarehouseInventoryOut]])
async def get_all_inventory_api(db: AsyncSession = Depends(get_db)):
    items = await get_all_warehouses_inventory(db)
    return success_response("Inventory fetched successfully", items)


# =========================
# TRANSFER
# =========================
@router.post("/transfer", response_model=APIResponse[None])
async def transfer_inventory_api(
    payload: InventoryTransferCreate,
    db: AsyncSession = Depends(get_db),
):
    await transfer_inventory(db, payload)
    return success_response("Inventory transferred successfully")


@router.get("/transfers", response_model=APIResponse[InventoryTransferListData])
async def list_transfers_api(
    db: AsyncSession = Depends(get_db),
    product_public_id: str | None = Query(None),
    warehouse_id: int | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    data = await list_inventory_transfers(
        db,
        product_public_id=product_public_id,
        warehouse_id=warehouse_id,
        page=page,
        page_size=page_size,
    )
    return success_response("Inventory transfers fetched successfully", data)


# =========================
# EXPIRATION ALERTS
# =========================
@router.get(
    "/alerts/expiring/{days}",
    response_model=APIResponse[list[WarehouseInventoryOut]],
)
async def expiring_alerts_api(days: int, db: AsyncSession = Depends(get_db)):
    items = await get_nearing_expiration_alerts(db, days)
    return success_response("Expiring inventory fetched successfully", items)


@router.get(
    "/alerts/expired",
    response_model=APIResponse[list[WarehouseInventoryOut]],
)
async def expired_inventory_api(db: AsyncSession = Depends(get_db)):
    items = await get_expired_inventory(db)
    return success_response("Expired inventory fetched successfully", items)


# =========================
# PER WAREHOUSE
# =========================
@router.post(
    "/{warehouse_id}",
    response_model=APIResponse[WarehouseInventoryOut],
    status_code=201,
)
async def add_product_api(
    warehouse_id: int,
    payload: WarehouseInventoryCreate,
    db: AsyncSession = Depends(get_db),
):
    inventory = await add_product_to_warehouse(db, warehouse_id, payload)
    return success_response("Product added to warehouse", inventory)


@router.get("/{warehouse_id}", response_model=APIResponse[WarehouseInventoryByWarehouse])
async def get_inventory_by_warehouse_api(
    warehouse_id: int,
    db: AsyncSession = Depends(get_db),
):
    data = await get_inventory_by_warehouse(db, warehouse_id)
    return success_response("Warehouse inventory fetched successfully", data)


@router.delete("/{warehouse_id}/{product_public_id}", response_model=APIResponse[None])
async def delete_inventory_api(
    warehouse_id: int,
    product_public_id: str,
    db: AsyncSession = Depends(get_db),
):
    await delete_inventory(db, warehouse_id, product_public_id)
    return success_response("Inventory removed from warehouse")
