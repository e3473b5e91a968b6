from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.response import success_response, APIResponse
from app.services.inventory.warehouse_service import (
    list_warehouses,
    get_warehouse,
    create_warehouse,
    update_warehouse,
    patch_warehouse,
    delete_warehouse,
)
from app.schemas.inventory.warehouse_schemas import (
    WarehouseCreate,
    WarehouseUpdate,
    WarehousePatch,
    WarehouseOut,
)

router = APIRouter(
    prefix="/warehouses",
    tags=["Warehouses"],
)


# =========================
# LIST
# =========================
@router.get("", response_model=APIResponse[list[WarehouseOut]])
async def list_warehouses_api(db: AsyncSession = Depends(get_db)):
    warehouses = await list_warehouses(db)
    return success_response("Warehouses fetched successfully", warehouses)


# =========================
# GET
# =========================
@router.get("/{warehouse_id:int}", response_model=APIResponse[WarehouseOut])
async def get_warehouse_api(warehouse_id: int, db: AsyncSession = Depends(get_db)):
    warehouse = await get_warehouse(db, warehouse_id)
    return success_response("Warehouse fetched successfully", warehouse)


# =========================
# CREATE
# =========================
@router.post("", response_model=APIResponse[WarehouseOut], status_code=201)
async def create_warehouse_api(
    payload: WarehouseCreate,
    db: AsyncSession = Depends(get_db),
):
    warehouse = await create_warehouse(db, payload)
    return success_response("Warehouse created successfully", warehouse)


# =========================
# UPDATE
# =========================
@router.put("/{warehouse_id:int}", response_model=APIResponse[WarehouseOut])
async def update_warehouse_api(
    warehouse_id: int,
    payload: WarehouseUpdate,
    db: AsyncSession = Depends(get_db),
):
    warehouse = await update_warehouse(db, warehouse_id, payload)
    return success_response("Warehouse updated successfully", warehouse)


@router.patch("/{warehouse_id:int}", response_model=APIResponse[WarehouseOut])
async def patch_warehouse_api(
    warehouse_id: int,
    payload: WarehousePatch,
    db: AsyncSession = Depends(get_db),
):
    warehouse = await patch_warehouse(db, warehouse_id, payload)
    return success_response("Warehouse updated successfully", warehouse)


# =========================
# DELETE
# =========================
@router.delete("/{warehouse_id:int}", response_model=APIResponse[None])
async def delete_warehouse_api(warehouse_id: int, db: AsyncSession = Depends(get_db)):
    await delete_warehouse(db, warehouse_id)
    return success_response("Warehouse deleted successfully")
