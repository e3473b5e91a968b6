# app/services/masters/product_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.models.masters.product_models import Product
from app.models.inventory.warehouse_inventory_models import WarehouseInventory
from app.schemas.masters.product_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductPatch,
    ProductOut,
)
from app.services.masters.category_service import get_category_or_404
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Columns that may not be cleared by an explicit null in a PATCH body
NON_NULLABLE_PATCH_FIELDS = {"name", "sku", "is_hazardous", "expiration_required", "price"}


def map_product(product: Product) -> ProductOut:
    return ProductOut(
        public_id=product.public_id,
        name=product.name,
        sku=product.sku,
        description=product.description,
        unit=product.unit,
        is_hazardous=product.is_hazardous,
        expiration_required=product.expiration_required,
        price=product.price,
        category_id=product.category_id,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ---------------- LOOKUP ----------------
async def get_active_product_or_404(
    db: AsyncSession,
    public_id: str,
    *,
    for_update: bool = False,
) -> Product:
    """Load an active product, optionally locking its row until the transaction ends.

    Stocking, transferring and soft-deleting all lock the product row first, so
    a soft delete can never commit alongside a new inventory row.
    """
    stmt = select(Product).where(
        Product.public_id == public_id,
        Product.is_deleted.is_(False),
    )
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)

    product = await db.scalar(stmt)
    if not product:
        raise AppException(
            404,
            f"Product not found with publicId: {public_id}",
            ErrorCode.PRODUCT_NOT_FOUND,
        )
    return product


async def _ensure_sku_available(db: AsyncSession, sku: str, exclude_id: int | None = None):
    # SKU uniqueness is global: soft-deleted rows still own their SKU
    stmt = select(Product.id).where(Product.sku == sku)
    if exclude_id is not None:
        stmt = stmt.where(Product.id != exclude_id)

    if await db.scalar(stmt):
        raise AppException(
            409,
            "SKU already exists",
            ErrorCode.PRODUCT_SKU_EXISTS,
        )


async def _commit_or_conflict(db: AsyncSession):
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "SKU already exists",
            ErrorCode.PRODUCT_SKU_EXISTS,
        )


# ---------------- LIST / GET ----------------
async def list_products(db: AsyncSession) -> list[ProductOut]:
    result = await db.execute(
        select(Product)
        .where(Product.is_deleted.is_(False))
        .order_by(Product.name.asc(), Product.id.asc())
    )
    return [map_product(p) for p in result.scalars().all()]


async def get_product(db: AsyncSession, public_id: str) -> ProductOut:
    return map_product(await get_active_product_or_404(db, public_id))


# ---------------- CREATE ----------------
async def create_product(db: AsyncSession, payload: ProductCreate) -> ProductOut:
    if payload.category_id is not None:
        await get_category_or_404(db, payload.category_id)

    await _ensure_sku_available(db, payload.sku)

    product = Product(**payload.model_dump())
    db.add(product)

    await _commit_or_conflict(db)
    await db.refresh(product)

    logger.info(
        "Created product",
        extra={"product_public_id": product.public_id, "sku": product.sku},
    )
    return map_product(product)


# ---------------- UPDATE (PUT) ----------------
async def update_product(
    db: AsyncSession,
    public_id: str,
    payload: ProductUpdate,
) -> ProductOut:
    product = await get_active_product_or_404(db, public_id)
    await get_category_or_404(db, payload.category_id)

    if payload.sku != product.sku:
        await _ensure_sku_available(db, payload.sku, exclude_id=product.id)

    product.name = payload.name
    product.sku = payload.sku
    product.description = payload.description
    product.unit = payload.unit
    product.is_hazardous = payload.is_hazardous
    product.expiration_required = payload.expiration_required
    product.price = payload.price
    product.category_id = payload.category_id

    await _commit_or_conflict(db)
    await db.refresh(product)
    return map_product(product)


# ---------------- UPDATE (PATCH) ----------------
async def patch_product(
    db: AsyncSession,
    public_id: str,
    payload: ProductPatch,
) -> ProductOut:
    product = await get_active_product_or_404(db, public_id)

    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise AppException(
            400,
            "No changes detected",
            ErrorCode.VALIDATION_ERROR,
        )

    cleared = sorted(f for f in NON_NULLABLE_PATCH_FIELDS if f in updates and updates[f] is None)
    if cleared:
        raise AppException(
            400,
            "Fields cannot be null",
            ErrorCode.VALIDATION_ERROR,
            {"fields": cleared},
        )

    if "category_id" in updates and updates["category_id"] is not None:
        await get_category_or_404(db, updates["category_id"])

    if "sku" in updates and updates["sku"] != product.sku:
        await _ensure_sku_available(db, updates["sku"], exclude_id=product.id)

    if "name" in updates:
        product.name = updates["name"]
    if "sku" in updates:
        product.sku = updates["sku"]
    if "description" in updates:
        product.description = updates["description"]
    if "unit" in updates:
        product.unit = updates["unit"]
    if "is_hazardous" in updates:
        product.is_hazardous = updates["is_hazardous"]
    if "expiration_required" in updates:
        product.expiration_required = updates["expiration_required"]
    if "price" in updates:
        product.price = updates["price"]
    if "category_id" in updates:
        product.category_id = updates["category_id"]

    await _commit_or_conflict(db)
    await db.refresh(product)
    return map_product(product)


# ---------------- SOFT DELETE ----------------
async def delete_product(db: AsyncSession, public_id: str) -> None:
    product = await get_active_product_or_404(db, public_id, for_update=True)

    stocked_in = await db.scalar(
        select(WarehouseInventory.warehouse_id).where(
            WarehouseInventory.product_id == product.id
        )
    )
    if stocked_in is not None:
        raise AppException(
            409,
            "Product is still stocked; remove its inventory first",
            ErrorCode.PRODUCT_STOCKED,
            {"warehouse_id": stocked_in},
        )

    product.is_deleted = True
    await db.commit()

    logger.info("Soft-deleted product", extra={"product_public_id": public_id})
