# app/schemas/masters/product_schemas.py

from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    sku: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    unit: Optional[str] = Field(None, max_length=50)
    is_hazardous: bool = False
    expiration_required: bool = False
    price: Decimal = Field(ge=0)
    category_id: Optional[int] = None


class ProductUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    sku: str = Field(..., min_length=1, max_length=100)
    description: str
    unit: str = Field(..., min_length=1, max_length=50)
    is_hazardous: bool
    expiration_required: bool
    price: Decimal = Field(ge=0)
    category_id: int


class ProductPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    unit: Optional[str] = Field(None, max_length=50)
    is_hazardous: Optional[bool] = None
    expiration_required: Optional[bool] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    category_id: Optional[int] = None


class ProductOut(BaseModel):
    public_id: str
    name: str
    sku: str
    description: Optional[str]
    unit: Optional[str]
    is_hazardous: bool
    expiration_required: bool
    price: Decimal
    category_id: Optional[int]

    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
