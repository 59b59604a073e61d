"""
Expense operations for a single owner.

Every call resolves the requesting username first. An expense owned by
someone else is reported exactly like a missing one.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import CategoryNotFound, IdentityNotFound
from expense_tracker.crud import category as category_crud
from expense_tracker.crud import credential as credential_crud
from expense_tracker.crud import expense as expense_crud
from expense_tracker.models.category import ExpenseCategory
from expense_tracker.models.credential import Credential
from expense_tracker.models.expense import Expense
from expense_tracker.schemas.common import Page
from expense_tracker.schemas.expense import (
    CategoryTotal,
    ExpenseCreate,
    ExpenseRead,
    ExpenseUpdate,
    MonthlyTotal,
)

logger = logging.getLogger(__name__)


async def _resolve_owner(username: str, db: AsyncSession) -> Credential:
    owner = await credential_crud.get_credential_by_username(username, db)
    if owner is None:
        raise IdentityNotFound(username)
    return owner


async def _resolve_category(category_id: int, db: AsyncSession) -> ExpenseCategory:
    category = await category_crud.get_category_by_id(category_id, db)
    if category is None:
        raise CategoryNotFound(category_id)
    return category


async def _owned_expense(expense_id: int, owner: Credential, db: AsyncSession) -> Optional[Expense]:
    expense = await expense_crud.get_expense_by_id(expense_id, db)
    if expense is None or expense.owner_id != owner.id:
        return None
    return expense


def _to_read(expenses) -> List[ExpenseRead]:
    return [ExpenseRead.model_validate(e) for e in expenses]


def _mutable_fields(ex_in: ExpenseCreate, category: ExpenseCategory) -> dict:
    fields = ex_in.model_dump(exclude={"category_id"})
    fields["category"] = category
    return fields


async def create_expense(ex_in: ExpenseCreate, username: str, db: AsyncSession) -> ExpenseRead:
    owner = await _resolve_owner(username, db)
    category = await _resolve_category(ex_in.category_id, db)
    fields = _mutable_fields(ex_in, category)
    fields["owner_id"] = owner.id
    expense = await expense_crud.create_expense(fields, db)
    logger.info(f"Created expense {expense.id} for {username}")
    return ExpenseRead.model_validate(expense)


async def list_expenses(username: str, db: AsyncSession) -> List[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    return _to_read(await expense_crud.get_expenses_for_owner(owner.id, db))


async def list_expenses_paginated(username: str, page: int, size: int, db: AsyncSession) -> Page[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    expenses, total = await expense_crud.get_expense_page_for_owner(owner.id, page * size, size, db)
    return Page[ExpenseRead].build(_to_read(expenses), total, page, size)


async def get_expense(expense_id: int, username: str, db: AsyncSession) -> Optional[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    expense = await _owned_expense(expense_id, owner, db)
    return ExpenseRead.model_validate(expense) if expense else None


async def list_expenses_by_date_range(username: str, start: date, end: date, db: AsyncSession) -> List[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    return _to_read(await expense_crud.get_expenses_in_date_range(owner.id, start, end, db))


async def list_expenses_by_category(username: str, category_id: int, db: AsyncSession) -> List[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    category = await _resolve_category(category_id, db)
    return _to_read(await expense_crud.get_expenses_in_category(owner.id, category.id, db))


async def search_expenses(username: str, text: str, db: AsyncSession) -> List[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    return _to_read(await expense_crud.search_expenses_by_description(owner.id, text, db))


async def update_expense(
    expense_id: int, ex_in: ExpenseUpdate, username: str, db: AsyncSession
) -> Optional[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    expense = await _owned_expense(expense_id, owner, db)
    if expense is None:
        return None
    category = await _resolve_category(ex_in.category_id, db)
    expense = await expense_crud.update_expense(expense, _mutable_fields(ex_in, category), db)
    return ExpenseRead.model_validate(expense)


async def delete_expense(expense_id: int, username: str, db: AsyncSession) -> bool:
    owner = await _resolve_owner(username, db)
    expense = await _owned_expense(expense_id, owner, db)
    if expense is None:
        return False
    await expense_crud.delete_expense(expense, db)
    logger.info(f"Deleted expense {expense_id} for {username}")
    return True


async def total_amount(username: str, db: AsyncSession) -> Decimal:
    owner = await _resolve_owner(username, db)
    return await expense_crud.sum_amounts(owner.id, db)


async def total_amount_by_date_range(username: str, start: date, end: date, db: AsyncSession) -> Decimal:
    owner = await _resolve_owner(username, db)
    return await expense_crud.sum_amounts(owner.id, db, start=start, end=end)


async def recent_expenses(username: str, db: AsyncSession) -> List[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    return _to_read(await expense_crud.get_recent_expenses(owner.id, db, limit=10))


async def count_expenses(username: str, db: AsyncSession) -> int:
    owner = await _resolve_owner(username, db)
    return await expense_crud.count_expenses_for_owner(owner.id, db)


async def list_recurring_expenses(username: str, db: AsyncSession) -> List[ExpenseRead]:
    owner = await _resolve_owner(username, db)
    return _to_read(await expense_crud.get_recurring_expenses(owner.id, db))


async def totals_by_category(username: str, db: AsyncSession) -> List[CategoryTotal]:
    owner = await _resolve_owner(username, db)
    rows = await expense_crud.sum_amounts_by_category(owner.id, db)
    return [CategoryTotal(category=name, total=_money(total)) for name, total in rows]


async def monthly_totals(username: str, db: AsyncSession) -> List[MonthlyTotal]:
    owner = await _resolve_owner(username, db)
    rows = await expense_crud.sum_amounts_by_month(owner.id, db)
    return [MonthlyTotal(year=int(y), month=int(m), total=_money(total)) for y, m, total in rows]


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))
