# app/schemas/masters/category_schemas.py

from pydantic import BaseModel, Field
from typing import Optional


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = Field(None, max_length=300)


class CategoryUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., max_length=300)


class CategoryPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = Field(None, max_length=300)


class CategoryOut(BaseModel):
    id: int
    name: str
    description: Optional[str]

    class Config:
        from_attributes = True
