# app/api/v1/auth.py
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, require_roles, ADMIN_ROLES
from app.core.auth.schemas import (
    AdminUserCreate, LoginRequest, TokenResponse, UserCreatedResponse,
    UserRegister, UserResponse, UserRole
)
from app.core.auth.security import create_access_token, get_password_hash, verify_password
from app.shared.database.models import User

logger = logging.getLogger(__name__)

router = APIRouter()

def _create_user(db: Session, username: str, email: str, password: str, role: str) -> User:
    """Crear usuario validando unicidad de username y email"""
    email = email.lower()
    existing_user = db.query(User).filter(
        or_(User.email == email, User.username == username)
    ).first()

    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ya existe un usuario con ese email o nombre de usuario"
        )

    try:
        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            role=role,
            is_active=True
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Usuario creado: {user.username} ({user.role})")
    return user

@router.post("/register", response_model=UserCreatedResponse, status_code=201)
async def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Registro público de usuarios

    El rol asignado es siempre `worker`; otros roles solo los crea un administrador.
    """
    user = _create_user(db, user_data.username, user_data.email, user_data.password, UserRole.WORKER.value)
    return UserCreatedResponse(
        message="Usuario registrado exitosamente",
        user_id=user.id,
        role=user.role
    )

@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Autenticación con email y contraseña; devuelve token JWT"""
    user = db.query(User).filter(User.email == credentials.email.lower()).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email o contraseña incorrectos"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Cuenta desactivada"
        )

    token = create_access_token({
        "user_id": user.id,
        "username": user.username,
        "role": user.role
    })

    user.last_login = datetime.now()
    db.commit()
    db.refresh(user)

    return TokenResponse(
        message="Autenticación exitosa",
        token=token,
        user=UserResponse.model_validate(user)
    )

@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Perfil del usuario autenticado"""
    return current_user

@router.post("/admin/create-user", response_model=UserCreatedResponse, status_code=201)
async def create_user_as_admin(
    user_data: AdminUserCreate,
    current_user: User = Depends(require_roles(ADMIN_ROLES)),
    db: Session = Depends(get_db)
):
    """Crear usuario con rol arbitrario (solo administradores)"""
    user = _create_user(db, user_data.username, user_data.email, user_data.password, user_data.role.value)
    return UserCreatedResponse(
        message="Usuario creado por el administrador",
        user_id=user.id,
        role=user.role
    )
