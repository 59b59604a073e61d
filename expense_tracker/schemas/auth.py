# expense_tracker/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field
from expense_tracker.models.credential import Role

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    username: str
    email: EmailStr
    role: Role

# Public fields returned on GET /auth/me
class CurrentUser(BaseModel):
    id: int
    username: str
    email: EmailStr
    role: Role
    enabled: bool

class MessageResponse(BaseModel):
    message: str
