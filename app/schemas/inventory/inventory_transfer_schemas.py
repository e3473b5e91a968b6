from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class InventoryTransferCreate(BaseModel):
    product_public_id: str = Field(..., min_length=1)
    source_warehouse_id: int
    destination_warehouse_id: int
    notes: Optional[str] = Field(None, max_length=1000)


class InventoryTransferOut(BaseModel):
    id: int
    product_public_id: str
    product_name: str
    quantity: int

    source_warehouse_id: Optional[int]
    source_warehouse_name: Optional[str]
    destination_warehouse_id: Optional[int]
    destination_warehouse_name: Optional[str]

    notes: Optional[str]
    created_at: datetime


class InventoryTransferListData(BaseModel):
    total: int
    items: List[InventoryTransferOut]
