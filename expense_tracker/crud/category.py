# expense_tracker/crud/category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from expense_tracker.models.category import ExpenseCategory
from expense_tracker.models.expense import Expense
from typing import Any, Dict, List, Optional

async def get_categories(db: AsyncSession) -> List[ExpenseCategory]:
    result = await db.execute(select(ExpenseCategory).order_by(ExpenseCategory.id))
    return result.scalars().all()

async def get_active_categories(db: AsyncSession) -> List[ExpenseCategory]:
    result = await db.execute(
        select(ExpenseCategory).where(ExpenseCategory.is_active.is_(True)).order_by(ExpenseCategory.id)
    )
    return result.scalars().all()

async def get_category_by_id(category_id: int, db: AsyncSession) -> Optional[ExpenseCategory]:
    return await db.get(ExpenseCategory, category_id)

async def get_category_by_name(name: str, db: AsyncSession) -> Optional[ExpenseCategory]:
    """Exact, case-sensitive lookup; names are unique as written."""
    result = await db.execute(select(ExpenseCategory).where(ExpenseCategory.name == name))
    return result.scalar_one_or_none()

async def category_name_exists(name: str, db: AsyncSession) -> bool:
    return await get_category_by_name(name, db) is not None

async def search_categories_by_name(name: str, db: AsyncSession) -> List[ExpenseCategory]:
    result = await db.execute(
        select(ExpenseCategory)
        .where(ExpenseCategory.name.icontains(name, autoescape=True))
        .order_by(ExpenseCategory.id)
    )
    return result.scalars().all()

async def count_categories(db: AsyncSession, active_only: bool = False) -> int:
    query = select(func.count(ExpenseCategory.id))
    if active_only:
        query = query.where(ExpenseCategory.is_active.is_(True))
    result = await db.execute(query)
    return result.scalar_one()

async def count_expenses_in_category(category_id: int, db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Expense.id)).where(Expense.category_id == category_id))
    return result.scalar_one()

async def get_categories_by_usage(db: AsyncSession) -> List[ExpenseCategory]:
    """Most referenced first; unused categories last, ties by id."""
    usage = func.count(Expense.id)
    result = await db.execute(
        select(ExpenseCategory)
        .outerjoin(Expense, Expense.category_id == ExpenseCategory.id)
        .group_by(ExpenseCategory.id)
        .order_by(usage.desc(), ExpenseCategory.id)
    )
    return result.scalars().all()

async def create_category(fields: Dict[str, Any], db: AsyncSession) -> ExpenseCategory:
    category = ExpenseCategory(**fields)
    db.add(category)
    await db.commit()
    return category

async def update_category(category: ExpenseCategory, fields: Dict[str, Any], db: AsyncSession) -> ExpenseCategory:
    for field, value in fields.items():
        setattr(category, field, value)
    db.add(category)
    await db.commit()
    return category

async def delete_category(category: ExpenseCategory, db: AsyncSession) -> None:
    await db.delete(category)
    await db.commit()
