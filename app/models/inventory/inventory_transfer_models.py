from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func
from app.core.db import Base


class InventoryTransfer(Base):
    """Audit record of a completed warehouse-to-warehouse move. APPEND-ONLY."""

    __tablename__ = "inventory_transfers"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    source_warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="SET NULL"), nullable=True, index=True)
    destination_warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="SET NULL"), nullable=True, index=True)
    quantity = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_inventory_transfer_qty_positive"),
        CheckConstraint("source_warehouse_id <> destination_warehouse_id", name="ck_inventory_transfer_warehouse_diff"),
        Index("ix_inventory_transfer_created", "created_at"),
    )

    def __repr__(self):
        return f"<InventoryTransfer id={self.id} product_id={self.product_id} {self.source_warehouse_id}->{self.destination_warehouse_id} qty={self.quantity}>"
