# expense_tracker/crud/credential.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from expense_tracker.models.credential import Credential, Role
from typing import Optional

async def get_credential_by_username(username: str, db: AsyncSession) -> Optional[Credential]:
    result = await db.execute(select(Credential).where(Credential.username == username))
    return result.scalar_one_or_none()

async def username_exists(username: str, db: AsyncSession) -> bool:
    return await get_credential_by_username(username, db) is not None

async def email_exists(email: str, db: AsyncSession) -> bool:
    result = await db.execute(select(Credential.id).where(Credential.email == email))
    return result.first() is not None

async def count_credentials(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Credential.id)))
    return result.scalar_one()

async def create_credential(
    username: str,
    email: str,
    hashed_password: str,
    db: AsyncSession,
    role: Role = Role.USER,
) -> Credential:
    credential = Credential(
        username=username,
        email=email,
        hashed_password=hashed_password,
        role=role,
        is_enabled=True,
    )
    db.add(credential)
    await db.commit()
    return credential
