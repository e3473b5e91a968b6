from sqlalchemy import Column, Integer, String, CheckConstraint
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Warehouse(Base, TimestampMixin):
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False, unique=True, index=True)
    location = Column(String(255), nullable=False)
    max_capacity = Column(Integer, nullable=False)
    current_capacity = Column(Integer, nullable=False, default=0)  # sum of inventory quantities, engine-owned

    __table_args__ = (
        CheckConstraint("max_capacity >= 1", name="ck_warehouse_max_capacity_positive"),
        CheckConstraint("current_capacity >= 0", name="ck_warehouse_current_capacity_non_negative"),
        CheckConstraint("current_capacity <= max_capacity", name="ck_warehouse_capacity_within_max"),
    )

    @property
    def available_capacity(self) -> int:
        return self.max_capacity - self.current_capacity

    def __repr__(self):
        return f"<Warehouse id={self.id} name={self.name} {self.current_capacity}/{self.max_capacity}>"
