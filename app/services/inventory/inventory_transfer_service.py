from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from sqlalchemy.orm import aliased

from app.models.inventory.inventory_transfer_models import InventoryTransfer
from app.models.inventory.warehouse_models import Warehouse
from app.models.masters.product_models import Product
from app.schemas.inventory.inventory_transfer_schemas import (
    InventoryTransferOut,
    InventoryTransferListData,
)


async def list_inventory_transfers(
    db: AsyncSession,
    *,
    product_public_id: str | None,
    warehouse_id: int | None,
    page: int,
    page_size: int,
) -> InventoryTransferListData:
    # the audit log keeps history of soft-deleted products too
    SourceWarehouse = aliased(Warehouse)
    DestinationWarehouse = aliased(Warehouse)

    filters = []
    if product_public_id:
        filters.append(Product.public_id == product_public_id)

    if warehouse_id:
        filters.append(
            or_(
                InventoryTransfer.source_warehouse_id == warehouse_id,
                InventoryTransfer.destination_warehouse_id == warehouse_id,
            )
        )

    total = await db.scalar(
        select(func.count())
        .select_from(InventoryTransfer)
        .join(Product, InventoryTransfer.product_id == Product.id)
        .where(*filters)
    )

    stmt = (
        select(
            InventoryTransfer,
            Product.public_id,
            Product.name,
            SourceWarehouse.name.label("source_name"),
            DestinationWarehouse.name.label("destination_name"),
        )
        .join(Product, InventoryTransfer.product_id == Product.id)
        .outerjoin(SourceWarehouse, InventoryTransfer.source_warehouse_id == SourceWarehouse.id)
        .outerjoin(
            DestinationWarehouse,
            InventoryTransfer.destination_warehouse_id == DestinationWarehouse.id,
        )
        .where(*filters)
        .order_by(InventoryTransfer.created_at.desc(), InventoryTransfer.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    rows = (await db.execute(stmt)).all()

    items = [
        InventoryTransferOut(
            id=t.id,
            product_public_id=public_id,
            product_name=product_name,
            quantity=t.quantity,
            source_warehouse_id=t.source_warehouse_id,
            source_warehouse_name=source_name,
            destination_warehouse_id=t.destination_warehouse_id,
            destination_warehouse_name=destination_name,
            notes=t.notes,
            created_at=t.created_at,
        )
        for t, public_id, product_name, source_name, destination_name in rows
    ]

    return InventoryTransferListData(total=total or 0, items=items)
