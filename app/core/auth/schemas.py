from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    WORKER = "worker"

class UserRegister(BaseModel):
    """Registro público: el rol siempre es worker"""
    username: str = Field(..., min_length=3, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=6)

class AdminUserCreate(UserRegister):
    role: UserRole = Field(default=UserRole.WORKER, description="Rol del usuario")

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

class TokenResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserResponse

class UserCreatedResponse(BaseModel):
    message: str
    user_id: int
    role: str
