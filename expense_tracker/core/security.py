# expense_tracker/core/security.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from .config import settings
from .exceptions import AuthenticationFailure
from expense_tracker.models.credential import Role

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, rebuilt from token claims on every request."""
    username: str
    role: Role
    email: Optional[str] = None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(
    subject: str,
    extra_claims: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT for the given subject (username).
    Extra claims (role, email) are merged into the payload.
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload: Dict[str, Any] = dict(extra_claims or {})
    payload.update({"sub": subject, "iat": now, "exp": expire})
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access_token(token: str) -> Identity:
    """
    Validate a bearer token and return the identity it carries.
    Raises AuthenticationFailure for expired, tampered or incomplete tokens.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationFailure("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationFailure("Invalid token")

    username = payload.get("sub")
    if not username:
        raise AuthenticationFailure("Invalid token: missing subject")

    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise AuthenticationFailure("Invalid token: unknown role")

    return Identity(username=username, role=role, email=payload.get("email"))
