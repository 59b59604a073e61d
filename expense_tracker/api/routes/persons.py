# expense_tracker/api/routes/persons.py
# Person records are profile data only; they are unrelated to login credentials.
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from expense_tracker.api.deps import bearer_scheme
from expense_tracker.core.database import get_async_session
from expense_tracker.core.exceptions import NotFound
from expense_tracker.schemas.auth import MessageResponse
from expense_tracker.schemas.common import CountResponse, ExistsResponse
from expense_tracker.schemas.person import PersonCreate, PersonRead, PersonUpdate
from expense_tracker.services import person as person_service

router = APIRouter(prefix="/users", tags=["Users"], dependencies=[Depends(bearer_scheme)])

def _not_found(person_id: int) -> NotFound:
    return NotFound(f"User not found with id: {person_id}")

@router.post("", response_model=PersonRead, status_code=status.HTTP_201_CREATED)
async def create_person(
    person_in: PersonCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await person_service.create_person(person_in, db)

@router.get("", response_model=List[PersonRead])
async def read_persons(db: AsyncSession = Depends(get_async_session)):
    return await person_service.list_persons(db)

@router.get("/search", response_model=List[PersonRead])
async def search_persons(
    name: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_session),
):
    """Match against first or last name, ignoring case"""
    return await person_service.search_persons(name, db)

@router.get("/count", response_model=CountResponse)
async def count_persons(db: AsyncSession = Depends(get_async_session)):
    return {"count": await person_service.count_persons(db)}

@router.get("/email/{email}", response_model=PersonRead)
async def read_person_by_email(
    email: str,
    db: AsyncSession = Depends(get_async_session),
):
    person = await person_service.get_person_by_email(email, db)
    if not person:
        raise NotFound(f"User not found with email: {email}")
    return person

@router.get("/{person_id}", response_model=PersonRead)
async def read_person(
    person_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    person = await person_service.get_person(person_id, db)
    if not person:
        raise _not_found(person_id)
    return person

@router.get("/{person_id}/exists", response_model=ExistsResponse)
async def person_exists(
    person_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    return {"exists": await person_service.person_exists(person_id, db)}

@router.put("/{person_id}", response_model=PersonRead)
async def replace_person(
    person_id: int,
    person_in: PersonCreate,
    db: AsyncSession = Depends(get_async_session),
):
    update = PersonUpdate(**person_in.model_dump())
    person = await person_service.update_person(person_id, update, db)
    if not person:
        raise _not_found(person_id)
    return person

@router.patch("/{person_id}", response_model=PersonRead)
async def update_person(
    person_id: int,
    person_in: PersonUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    person = await person_service.update_person(person_id, person_in, db)
    if not person:
        raise _not_found(person_id)
    return person

@router.delete("/{person_id}", response_model=MessageResponse)
async def delete_person(
    person_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    if not await person_service.delete_person(person_id, db):
        raise _not_found(person_id)
    return {"message": "User deleted successfully"}
