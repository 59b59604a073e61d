# expense_tracker/schemas/category.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

class CategoryBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    color: Optional[str] = Field(None, max_length=20, description="Hex colour, e.g. #FF6B6B")
    icon: Optional[str] = Field(None, max_length=50, description="Icon class, e.g. fas fa-car")
    is_active: bool = True

class CategoryCreate(CategoryBase):
    pass

# PUT replaces every mutable field
class CategoryUpdate(CategoryBase):
    pass

class CategoryRead(CategoryBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
