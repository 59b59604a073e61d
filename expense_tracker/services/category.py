# expense_tracker/services/category.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import DuplicateName, ValidationError
from expense_tracker.crud import category as category_crud
from expense_tracker.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate

logger = logging.getLogger(__name__)


def _to_read(categories) -> List[CategoryRead]:
    return [CategoryRead.model_validate(c) for c in categories]


async def create_category(cat_in: CategoryCreate, db: AsyncSession) -> CategoryRead:
    if await category_crud.category_name_exists(cat_in.name, db):
        raise DuplicateName(f"Category name already exists: {cat_in.name}")
    try:
        category = await category_crud.create_category(cat_in.model_dump(), db)
    except IntegrityError:
        await db.rollback()
        raise DuplicateName(f"Category name already exists: {cat_in.name}")
    logger.info(f"Created category {category.name} (id={category.id})")
    return CategoryRead.model_validate(category)


async def list_categories(db: AsyncSession) -> List[CategoryRead]:
    return _to_read(await category_crud.get_categories(db))


async def list_active_categories(db: AsyncSession) -> List[CategoryRead]:
    return _to_read(await category_crud.get_active_categories(db))


async def get_category(category_id: int, db: AsyncSession) -> Optional[CategoryRead]:
    category = await category_crud.get_category_by_id(category_id, db)
    return CategoryRead.model_validate(category) if category else None


async def get_category_by_name(name: str, db: AsyncSession) -> Optional[CategoryRead]:
    category = await category_crud.get_category_by_name(name, db)
    return CategoryRead.model_validate(category) if category else None


async def search_categories(name: str, db: AsyncSession) -> List[CategoryRead]:
    return _to_read(await category_crud.search_categories_by_name(name, db))


async def update_category(category_id: int, cat_in: CategoryUpdate, db: AsyncSession) -> Optional[CategoryRead]:
    category = await category_crud.get_category_by_id(category_id, db)
    if category is None:
        return None
    if category.name != cat_in.name and await category_crud.category_name_exists(cat_in.name, db):
        raise DuplicateName(f"Category name already exists: {cat_in.name}")
    try:
        category = await category_crud.update_category(category, cat_in.model_dump(), db)
    except IntegrityError:
        await db.rollback()
        raise DuplicateName(f"Category name already exists: {cat_in.name}")
    return CategoryRead.model_validate(category)


async def delete_category(category_id: int, db: AsyncSession) -> bool:
    category = await category_crud.get_category_by_id(category_id, db)
    if category is None:
        return False
    in_use = await category_crud.count_expenses_in_category(category_id, db)
    if in_use:
        raise ValidationError(
            f"Category {category.name} is used by {in_use} expense(s); deactivate it instead"
        )
    await category_crud.delete_category(category, db)
    logger.info(f"Deleted category {category_id}")
    return True


async def deactivate_category(category_id: int, db: AsyncSession) -> Optional[CategoryRead]:
    category = await category_crud.get_category_by_id(category_id, db)
    if category is None:
        return None
    category = await category_crud.update_category(category, {"is_active": False}, db)
    return CategoryRead.model_validate(category)


async def category_exists(category_id: int, db: AsyncSession) -> bool:
    return await category_crud.get_category_by_id(category_id, db) is not None


async def count_categories(db: AsyncSession) -> int:
    return await category_crud.count_categories(db)


async def count_active_categories(db: AsyncSession) -> int:
    return await category_crud.count_categories(db, active_only=True)


async def list_categories_by_usage(db: AsyncSession) -> List[CategoryRead]:
    return _to_read(await category_crud.get_categories_by_usage(db))
