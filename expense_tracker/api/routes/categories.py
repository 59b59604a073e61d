# expense_tracker/api/routes/categories.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from expense_tracker.api.deps import bearer_scheme
from expense_tracker.core.database import get_async_session
from expense_tracker.core.exceptions import NotFound
from expense_tracker.schemas.auth import MessageResponse
from expense_tracker.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from expense_tracker.schemas.common import CountResponse, ExistsResponse
from expense_tracker.services import category as category_service

# Admin-only mutations are enforced by the access gate
router = APIRouter(
    prefix="/expense-categories",
    tags=["Expense Categories"],
    dependencies=[Depends(bearer_scheme)],
)

def _not_found(category_id: int) -> NotFound:
    return NotFound(f"Category not found with id: {category_id}")

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    cat_in: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await category_service.create_category(cat_in, db)

@router.get("", response_model=List[CategoryRead])
async def read_categories(db: AsyncSession = Depends(get_async_session)):
    return await category_service.list_categories(db)

@router.get("/active", response_model=List[CategoryRead])
async def read_active_categories(db: AsyncSession = Depends(get_async_session)):
    return await category_service.list_active_categories(db)

@router.get("/popular", response_model=List[CategoryRead])
async def read_popular_categories(db: AsyncSession = Depends(get_async_session)):
    """Categories ordered by how many expenses use them"""
    return await category_service.list_categories_by_usage(db)

@router.get("/search", response_model=List[CategoryRead])
async def search_categories(
    name: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_session),
):
    return await category_service.search_categories(name, db)

@router.get("/count", response_model=CountResponse)
async def count_categories(db: AsyncSession = Depends(get_async_session)):
    return {"count": await category_service.count_categories(db)}

@router.get("/count/active", response_model=CountResponse)
async def count_active_categories(db: AsyncSession = Depends(get_async_session)):
    return {"count": await category_service.count_active_categories(db)}

@router.get("/name/{name}", response_model=CategoryRead)
async def read_category_by_name(
    name: str,
    db: AsyncSession = Depends(get_async_session),
):
    category = await category_service.get_category_by_name(name, db)
    if not category:
        raise NotFound(f"Category not found with name: {name}")
    return category

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    category = await category_service.get_category(category_id, db)
    if not category:
        raise _not_found(category_id)
    return category

@router.get("/{category_id}/exists", response_model=ExistsResponse)
async def category_exists(
    category_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    return {"exists": await category_service.category_exists(category_id, db)}

@router.put("/{category_id}", response_model=CategoryRead)
async def update_category(
    category_id: int,
    cat_in: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    category = await category_service.update_category(category_id, cat_in, db)
    if not category:
        raise _not_found(category_id)
    return category

@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    if not await category_service.delete_category(category_id, db):
        raise _not_found(category_id)
    return {"message": "Category deleted successfully"}

@router.patch("/{category_id}/deactivate", response_model=CategoryRead)
async def deactivate_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    """Soft delete: the category stays readable with is_active=false"""
    category = await category_service.deactivate_category(category_id, db)
    if not category:
        raise _not_found(category_id)
    return category
