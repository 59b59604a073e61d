"""
Registration, login and current-user lookup.

Tokens carry the username as ``sub`` plus ``role`` and ``email`` claims so
the access gate can authorize a request without touching the database.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import DuplicateIdentity, InvalidCredentials, NotFound
from expense_tracker.core.security import create_access_token, get_password_hash, verify_password
from expense_tracker.crud import credential as credential_crud
from expense_tracker.models.credential import Credential
from expense_tracker.schemas.auth import AuthResponse, CurrentUser, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


def _issue_token(credential: Credential) -> AuthResponse:
    token = create_access_token(
        credential.username,
        extra_claims={"role": credential.role.value, "email": credential.email},
    )
    return AuthResponse(
        token=token,
        username=credential.username,
        email=credential.email,
        role=credential.role,
    )


async def register(request: RegisterRequest, db: AsyncSession) -> AuthResponse:
    if await credential_crud.username_exists(request.username, db):
        raise DuplicateIdentity("Username already exists")
    if await credential_crud.email_exists(request.email, db):
        raise DuplicateIdentity("Email already exists")

    try:
        credential = await credential_crud.create_credential(
            username=request.username,
            email=request.email,
            hashed_password=get_password_hash(request.password),
            db=db,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration
        await db.rollback()
        raise DuplicateIdentity("Username or email already exists")

    logger.info(f"Registered user {credential.username}")
    return _issue_token(credential)


async def login(request: LoginRequest, db: AsyncSession) -> AuthResponse:
    credential = await credential_crud.get_credential_by_username(request.username, db)
    if credential is None or not verify_password(request.password, credential.hashed_password):
        logger.warning(f"Failed login attempt for {request.username}")
        raise InvalidCredentials()
    if not credential.is_enabled:
        logger.warning(f"Login attempt for disabled user {request.username}")
        raise InvalidCredentials()
    return _issue_token(credential)


async def current_user(username: str, db: AsyncSession) -> CurrentUser:
    credential = await credential_crud.get_credential_by_username(username, db)
    if credential is None:
        raise NotFound("User not found")
    return CurrentUser(
        id=credential.id,
        username=credential.username,
        email=credential.email,
        role=credential.role,
        enabled=credential.is_enabled,
    )
