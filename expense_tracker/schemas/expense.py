# expense_tracker/schemas/expense.py
from typing import Optional
from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from expense_tracker.models.expense import PaymentMethod, RecurringFrequency
from .category import CategoryRead

class ExpenseBase(BaseModel):
    description: str = Field(..., min_length=2, max_length=255, description="E.g. Lunch with team")
    amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=10, decimal_places=2)
    expense_date: date
    category_id: int
    notes: Optional[str] = Field(None, max_length=500)
    payment_method: PaymentMethod = PaymentMethod.CASH
    receipt_url: Optional[str] = Field(None, max_length=500)
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None

class ExpenseCreate(ExpenseBase):
    pass

# PUT replaces every mutable field
class ExpenseUpdate(ExpenseBase):
    pass

class ExpenseRead(BaseModel):
    id: int
    description: str
    amount: Decimal
    expense_date: date
    category: CategoryRead
    notes: Optional[str] = None
    payment_method: PaymentMethod
    receipt_url: Optional[str] = None
    is_recurring: bool
    recurring_frequency: Optional[RecurringFrequency] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class CategoryTotal(BaseModel):
    category: str
    total: Decimal

class MonthlyTotal(BaseModel):
    year: int
    month: int
    total: Decimal
