import uuid

from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, ForeignKey, Index, CheckConstraint
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, SoftDeleteMixin


def _new_public_id() -> str:
    return str(uuid.uuid4())


class Product(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    public_id = Column(String(36), nullable=False, unique=True, index=True, default=_new_public_id)  # only id exposed by the API
    name = Column(String(200), nullable=False, index=True)
    sku = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    unit = Column(String(50), nullable=True)
    is_hazardous = Column(Boolean, nullable=False, default=False)
    expiration_required = Column(Boolean, nullable=False, default=False)
    price = Column(Numeric(12, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        Index("ix_product_active_name", "is_deleted", "name"),
    )

    def __repr__(self):
        return f"<Product id={self.id} public_id={self.public_id} sku={self.sku}>"
