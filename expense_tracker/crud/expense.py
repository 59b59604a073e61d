# expense_tracker/crud/expense.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, extract, func
from expense_tracker.models.category import ExpenseCategory
from expense_tracker.models.expense import Expense
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

# Newest expense date first; id keeps rows on the same day stable
NEWEST_FIRST = (desc(Expense.expense_date), desc(Expense.id))

def _owned_by(owner_id: int):
    return select(Expense).where(Expense.owner_id == owner_id)

async def get_expenses_for_owner(owner_id: int, db: AsyncSession) -> List[Expense]:
    result = await db.execute(_owned_by(owner_id).order_by(*NEWEST_FIRST))
    return result.scalars().all()

async def get_expense_page_for_owner(
    owner_id: int, offset: int, limit: int, db: AsyncSession
) -> Tuple[List[Expense], int]:
    result = await db.execute(_owned_by(owner_id).order_by(*NEWEST_FIRST).offset(offset).limit(limit))
    total = await count_expenses_for_owner(owner_id, db)
    return result.scalars().all(), total

async def get_expense_by_id(expense_id: int, db: AsyncSession) -> Optional[Expense]:
    return await db.get(Expense, expense_id)

async def get_expenses_in_date_range(owner_id: int, start: date, end: date, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        _owned_by(owner_id)
        .where(Expense.expense_date.between(start, end))
        .order_by(*NEWEST_FIRST)
    )
    return result.scalars().all()

async def get_expenses_in_category(owner_id: int, category_id: int, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        _owned_by(owner_id).where(Expense.category_id == category_id).order_by(*NEWEST_FIRST)
    )
    return result.scalars().all()

async def search_expenses_by_description(owner_id: int, text: str, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        _owned_by(owner_id)
        .where(Expense.description.icontains(text, autoescape=True))
        .order_by(*NEWEST_FIRST)
    )
    return result.scalars().all()

async def get_recurring_expenses(owner_id: int, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        _owned_by(owner_id).where(Expense.is_recurring.is_(True)).order_by(*NEWEST_FIRST)
    )
    return result.scalars().all()

async def get_recent_expenses(owner_id: int, db: AsyncSession, limit: int = 10) -> List[Expense]:
    """Most recently created first, regardless of expense date."""
    result = await db.execute(
        _owned_by(owner_id).order_by(desc(Expense.created_at), desc(Expense.id)).limit(limit)
    )
    return result.scalars().all()

async def count_expenses_for_owner(owner_id: int, db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Expense.id)).where(Expense.owner_id == owner_id))
    return result.scalar_one()

async def sum_amounts(
    owner_id: int,
    db: AsyncSession,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Decimal:
    query = select(func.coalesce(func.sum(Expense.amount), 0)).where(Expense.owner_id == owner_id)
    if start is not None and end is not None:
        query = query.where(Expense.expense_date.between(start, end))
    result = await db.execute(query)
    return Decimal(str(result.scalar_one())).quantize(Decimal("0.01"))

async def sum_amounts_by_category(owner_id: int, db: AsyncSession) -> List[Tuple[str, Any]]:
    total = func.sum(Expense.amount)
    result = await db.execute(
        select(ExpenseCategory.name, total)
        .join(ExpenseCategory, Expense.category_id == ExpenseCategory.id)
        .where(Expense.owner_id == owner_id)
        .group_by(ExpenseCategory.name)
        .order_by(total.desc(), ExpenseCategory.name)
    )
    return result.all()

async def sum_amounts_by_month(owner_id: int, db: AsyncSession) -> List[Tuple[int, int, Any]]:
    year = extract("year", Expense.expense_date)
    month = extract("month", Expense.expense_date)
    result = await db.execute(
        select(year, month, func.sum(Expense.amount))
        .where(Expense.owner_id == owner_id)
        .group_by(year, month)
        .order_by(year.desc(), month.desc())
    )
    return result.all()

async def create_expense(fields: Dict[str, Any], db: AsyncSession) -> Expense:
    expense = Expense(**fields)
    db.add(expense)
    await db.commit()
    return expense

async def update_expense(expense: Expense, fields: Dict[str, Any], db: AsyncSession) -> Expense:
    for field, value in fields.items():
        setattr(expense, field, value)
    db.add(expense)
    await db.commit()
    return expense

async def delete_expense(expense: Expense, db: AsyncSession) -> None:
    await db.delete(expense)
    await db.commit()
