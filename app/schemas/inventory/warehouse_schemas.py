from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class WarehouseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    location: str = Field(..., min_length=1, max_length=255)
    max_capacity: int = Field(..., ge=1)


class WarehouseUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    location: str = Field(..., min_length=1, max_length=255)
    max_capacity: int = Field(..., ge=1)


class WarehousePatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    max_capacity: Optional[int] = Field(None, ge=1)


class WarehouseOut(BaseModel):
    id: int
    name: str
    location: str
    max_capacity: int
    current_capacity: int
    available_capacity: int

    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
