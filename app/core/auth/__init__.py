from .dependencies import get_current_user, require_roles, WORKER_ROLES, ADMIN_ROLES
from .security import create_access_token, decode_access_token, get_password_hash, verify_password

__all__ = [
    "get_current_user",
    "require_roles",
    "WORKER_ROLES",
    "ADMIN_ROLES",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password"
]
