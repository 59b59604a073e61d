# expense_tracker/services/person.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import DuplicateEmail
from expense_tracker.crud import person as person_crud
from expense_tracker.schemas.person import PersonCreate, PersonRead, PersonUpdate

logger = logging.getLogger(__name__)


def _to_read(persons) -> List[PersonRead]:
    return [PersonRead.model_validate(p) for p in persons]


async def create_person(person_in: PersonCreate, db: AsyncSession) -> PersonRead:
    if await person_crud.person_email_exists(person_in.email, db):
        raise DuplicateEmail(f"Email already exists: {person_in.email}")
    try:
        person = await person_crud.create_person(person_in.model_dump(), db)
    except IntegrityError:
        await db.rollback()
        raise DuplicateEmail(f"Email already exists: {person_in.email}")
    return PersonRead.model_validate(person)


async def list_persons(db: AsyncSession) -> List[PersonRead]:
    return _to_read(await person_crud.get_persons(db))


async def get_person(person_id: int, db: AsyncSession) -> Optional[PersonRead]:
    person = await person_crud.get_person_by_id(person_id, db)
    return PersonRead.model_validate(person) if person else None


async def get_person_by_email(email: str, db: AsyncSession) -> Optional[PersonRead]:
    person = await person_crud.get_person_by_email(email, db)
    return PersonRead.model_validate(person) if person else None


async def search_persons(name: str, db: AsyncSession) -> List[PersonRead]:
    return _to_read(await person_crud.search_persons_by_name(name, db))


async def update_person(person_id: int, person_in: PersonUpdate, db: AsyncSession) -> Optional[PersonRead]:
    """Apply only the fields present in the request."""
    person = await person_crud.get_person_by_id(person_id, db)
    if person is None:
        return None

    fields = {k: v for k, v in person_in.model_dump(exclude_unset=True).items() if v is not None}
    new_email = fields.get("email")
    if new_email is not None and new_email != person.email:
        if await person_crud.person_email_exists(new_email, db):
            raise DuplicateEmail(f"Email already exists: {new_email}")

    if not fields:
        return PersonRead.model_validate(person)

    try:
        person = await person_crud.update_person(person, fields, db)
    except IntegrityError:
        await db.rollback()
        raise DuplicateEmail(f"Email already exists: {new_email}")
    return PersonRead.model_validate(person)


async def delete_person(person_id: int, db: AsyncSession) -> bool:
    person = await person_crud.get_person_by_id(person_id, db)
    if person is None:
        return False
    await person_crud.delete_person(person, db)
    logger.info(f"Deleted person {person_id}")
    return True


async def person_exists(person_id: int, db: AsyncSession) -> bool:
    return await person_crud.get_person_by_id(person_id, db) is not None


async def count_persons(db: AsyncSession) -> int:
    return await person_crud.count_persons(db)
