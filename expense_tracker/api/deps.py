# expense_tracker/api/deps.py
from typing import Optional
from fastapi import Request
from fastapi.security import HTTPBearer

from expense_tracker.core.exceptions import AuthenticationFailure
from expense_tracker.core.security import Identity

# Only documents the scheme in OpenAPI; validation happens in AccessControlMiddleware
bearer_scheme = HTTPBearer(auto_error=False)

def get_current_identity(request: Request) -> Identity:
    """Identity the access gate attached to this request."""
    identity: Optional[Identity] = getattr(request.state, "identity", None)
    if identity is None:
        raise AuthenticationFailure("Authentication required")
    return identity

def get_current_username(request: Request) -> str:
    return get_current_identity(request).username
