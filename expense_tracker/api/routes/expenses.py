# expense_tracker/api/routes/expenses.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import List

from expense_tracker.api.deps import bearer_scheme, get_current_username
from expense_tracker.core.database import get_async_session
from expense_tracker.core.exceptions import NotFound, ValidationError
from expense_tracker.schemas.auth import MessageResponse
from expense_tracker.schemas.common import CountResponse, Page, TotalResponse
from expense_tracker.schemas.expense import (
    CategoryTotal,
    ExpenseCreate,
    ExpenseRead,
    ExpenseUpdate,
    MonthlyTotal,
)
from expense_tracker.services import expense as expense_service

router = APIRouter(prefix="/expenses", tags=["Expenses"], dependencies=[Depends(bearer_scheme)])

def _not_found(expense_id: int) -> NotFound:
    return NotFound(f"Expense not found with id: {expense_id}")

def _check_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ValidationError("start_date must not be after end_date")

@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    ex_in: ExpenseCreate,
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return await expense_service.create_expense(ex_in, username, db)

@router.get("", response_model=List[ExpenseRead])
async def read_expenses(
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return await expense_service.list_expenses(username, db)

@router.get("/paginated", response_model=Page[ExpenseRead])
async def read_expenses_paginated(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return await expense_service.list_expenses_paginated(username, page, size, db)

@router.get("/date-range", response_model=List[ExpenseRead])
async def read_expenses_by_date_range(
    start_date: date,
    end_date: date,
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    _check_range(start_date, end_date)
    return await expense_service.list_expenses_by_date_range(username, start_date, end_date, db)

@router.get("/category/{category_id}", response_model=List[ExpenseRead])
async def read_expenses_by_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return await expense_service.list_expenses_by_category(username, category_id, db)

@router.get("/search", response_model=List[ExpenseRead])
async def search_expenses(
    description: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return await expense_service.search_expenses(username, description, db)

@router.get("/total", response_model=TotalResponse)
async def read_total(
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return {"total": await expense_service.total_amount(username, db)}

@router.get("/total/date-range", response_model=TotalResponse)
async def read_total_by_date_range(
    start_date: date,
    end_date: date,
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    _check_range(start_date, end_date)
    total = await expense_service.total_amount_by_date_range(username, start_date, end_date, db)
    return {"total": total}

@router.get("/recent", response_model=List[ExpenseRead])
async def read_recent_expenses(
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    """Ten most recently recorded expenses"""
    return await expense_service.recent_expenses(username, db)

@router.get("/count", response_model=CountResponse)
async def count_expenses(
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return {"count": await expense_service.count_expenses(username, db)}

@router.get("/recurring", response_model=List[ExpenseRead])
async def read_recurring_expenses(
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return await expense_service.list_recurring_expenses(username, db)

@router.get("/summary/by-category", response_model=List[CategoryTotal])
async def read_totals_by_category(
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return await expense_service.totals_by_category(username, db)

@router.get("/summary/monthly", response_model=List[MonthlyTotal])
async def read_monthly_totals(
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    return await expense_service.monthly_totals(username, db)

@router.get("/{expense_id}", response_model=ExpenseRead)
async def read_expense(
    expense_id: int,
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    expense = await expense_service.get_expense(expense_id, username, db)
    if not expense:
        raise _not_found(expense_id)
    return expense

@router.put("/{expense_id}", response_model=ExpenseRead)
async def update_expense(
    expense_id: int,
    ex_in: ExpenseUpdate,
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    expense = await expense_service.update_expense(expense_id, ex_in, username, db)
    if not expense:
        raise _not_found(expense_id)
    return expense

@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: int,
    db: AsyncSession = Depends(get_async_session),
    username: str = Depends(get_current_username),
):
    if not await expense_service.delete_expense(expense_id, username, db):
        raise _not_found(expense_id)
    return {"message": "Expense deleted successfully"}
