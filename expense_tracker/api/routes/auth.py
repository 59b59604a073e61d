# expense_tracker/api/routes/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.api.deps import bearer_scheme, get_current_username
from expense_tracker.core.database import get_async_session
from expense_tracker.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from expense_tracker.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """Create a USER account and return a signed token"""
    return await auth_service.register(request, db)

@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
):
    return await auth_service.login(request, db)

@router.get("/me", response_model=CurrentUser, dependencies=[Depends(bearer_scheme)])
async def read_current_user(
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_async_session),
):
    """Get the authenticated user's public profile"""
    return await auth_service.current_user(username, db)

# Tokens are stateless; the client simply discards its copy
@router.post("/logout", response_model=MessageResponse)
async def logout():
    return {"message": "Logged out successfully"}
