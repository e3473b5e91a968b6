from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional, List

from app.schemas.masters.product_schemas import ProductOut


class WarehouseInventoryCreate(BaseModel):
    product_public_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    storage_location: Optional[str] = Field(None, max_length=100)
    expiration_date: Optional[date] = None


# -------------------------
# NESTED OBJECTS
# -------------------------
class WarehouseMini(BaseModel):
    id: int
    name: str
    location: str


# -------------------------
# ROW SCHEMA
# -------------------------
class WarehouseInventoryOut(BaseModel):
    id: int
    product_public_id: str
    quantity: int
    storage_location: Optional[str]
    expiration_date: Optional[date]

    warehouse: WarehouseMini
    product: ProductOut

    created_at: datetime
    updated_at: Optional[datetime]


class WarehouseInventoryByWarehouse(BaseModel):
    warehouse_id: int
    warehouse_name: str
    warehouse_location: str
    items: List[WarehouseInventoryOut]
