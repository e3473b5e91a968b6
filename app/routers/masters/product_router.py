# app/routers/masters/product_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.masters.product_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductPatch,
    ProductOut,
)
from app.services.masters.product_service import (
    create_product,
    list_products,
    get_product,
    update_product,
    patch_product,
    delete_product,
)
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/api/warehouse/products", tags=["Products"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[ProductOut]])
async def list_products_api(db: AsyncSession = Depends(get_db)):
    products = await list_products(db)
    return success_response("Products fetched successfully", products)


@router.get("/{public_id}", response_model=APIResponse[ProductOut])
async def get_product_api(public_id: str, db: AsyncSession = Depends(get_db)):
    product = await get_product(db, public_id)
    return success_response("Product fetched successfully", product)


@router.post("", response_model=APIResponse[ProductOut], status_code=201)
async def create_product_api(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Create product", extra={"sku": payload.sku})
    product = await create_product(db, payload)
    return success_response("Product created successfully", product)


@router.put("/{public_id}", response_model=APIResponse[ProductOut])
async def update_product_api(
    public_id: str,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
):
    product = await update_product(db, public_id, payload)
    return success_response("Product updated successfully", product)


@router.patch("/{public_id}", response_model=APIResponse[ProductOut])
async def patch_product_api(
    public_id: str,
    payload: ProductPatch,
    db: AsyncSession = Depends(get_db),
):
    product = await patch_product(db, public_id, payload)
    return success_response("Product updated successfully", product)


@router.delete("/{public_id}", response_model=APIResponse[None])
async def delete_product_api(public_id: str, db: AsyncSession = Depends(get_db)):
    await delete_product(db, public_id)
    return success_response("Product deleted successfully")
