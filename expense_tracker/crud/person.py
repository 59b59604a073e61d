# expense_tracker/crud/person.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func, or_
from expense_tracker.models.person import Person
from typing import Any, Dict, List, Optional

async def get_persons(db: AsyncSession) -> List[Person]:
    result = await db.execute(select(Person).order_by(Person.id))
    return result.scalars().all()

async def get_person_by_id(person_id: int, db: AsyncSession) -> Optional[Person]:
    return await db.get(Person, person_id)

async def get_person_by_email(email: str, db: AsyncSession) -> Optional[Person]:
    result = await db.execute(select(Person).where(Person.email == email))
    return result.scalar_one_or_none()

async def person_email_exists(email: str, db: AsyncSession) -> bool:
    return await get_person_by_email(email, db) is not None

async def search_persons_by_name(name: str, db: AsyncSession) -> List[Person]:
    pattern = f"%{name.lower()}%"
    result = await db.execute(
        select(Person)
        .where(or_(func.lower(Person.first_name).like(pattern), func.lower(Person.last_name).like(pattern)))
        .order_by(Person.id)
    )
    return result.scalars().all()

async def count_persons(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Person.id)))
    return result.scalar_one()

async def create_person(fields: Dict[str, Any], db: AsyncSession) -> Person:
    person = Person(**fields)
    db.add(person)
    await db.commit()
    return person

async def update_person(person: Person, fields: Dict[str, Any], db: AsyncSession) -> Person:
    for field, value in fields.items():
        setattr(person, field, value)
    db.add(person)
    await db.commit()
    return person

async def delete_person(person: Person, db: AsyncSession) -> None:
    await db.delete(person)
    await db.commit()
