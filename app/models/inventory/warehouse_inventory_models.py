from sqlalchemy import Column, Integer, String, Date, ForeignKey, CheckConstraint, UniqueConstraint, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class WarehouseInventory(Base, TimestampMixin):
    """Stock of one product in the one warehouse currently holding it."""

    __tablename__ = "warehouse_inventory"

    id = Column(Integer, primary_key=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False, index=True)
    # unique: a product is stocked in at most one warehouse system-wide
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, unique=True)
    quantity = Column(Integer, nullable=False)
    storage_location = Column(String(100), nullable=True)
    expiration_date = Column(Date, nullable=True)

    __table_args__ = (
        UniqueConstraint("warehouse_id", "product_id", name="uq_warehouse_inventory_warehouse_product"),
        CheckConstraint("quantity >= 1", name="ck_warehouse_inventory_quantity_positive"),
        Index("ix_warehouse_inventory_expiration", "expiration_date"),
    )

    def __repr__(self):
        return f"<WarehouseInventory id={self.id} warehouse_id={self.warehouse_id} product_id={self.product_id} qty={self.quantity}>"
