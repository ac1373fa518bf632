# app/core/auth/security.py
"""
Utilidades de seguridad: hash de contraseñas (passlib, pbkdf2_sha256) y
tokens JWT (PyJWT, HS256 con claim `exp`).
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from app.config.settings import settings

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return _pwd_context.verify(plain_password, password_hash)
    except (ValueError, TypeError):
        return False


def create_access_token(data: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    payload = dict(data)
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes
    )
    payload["exp"] = expire
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida el token.

    Propaga jwt.ExpiredSignatureError / jwt.InvalidTokenError para que la
    dependencia distinga token vencido de token inválido.
    """
    return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
