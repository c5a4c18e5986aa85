"""Authentication and role-based authorization."""
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any, Dict, Optional

import bcrypt
import jwt
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ems_api.config import settings
from ems_api.database import get_db
from ems_api.exceptions import ForbiddenError, UnauthorizedError
from ems_api.logger import get_logger
from ems_api.models import User, UserRole

logger = get_logger(__name__)


class Permission(str, Enum):
    """Operations a caller can be authorized for."""
    COMPANY_CREATE = "company:create"
    COMPANY_VIEW = "company:view"
    COMPANY_UPDATE = "company:update"
    COMPANY_DELETE = "company:delete"

    DEPARTMENT_CREATE = "department:create"
    DEPARTMENT_VIEW = "department:view"
    DEPARTMENT_UPDATE = "department:update"
    DEPARTMENT_DELETE = "department:delete"

    EMPLOYEE_CREATE = "employee:create"
    EMPLOYEE_VIEW = "employee:view"
    EMPLOYEE_UPDATE = "employee:update"
    EMPLOYEE_CHANGE_STATUS = "employee:change_status"
    EMPLOYEE_DELETE = "employee:delete"

    USERS_MANAGE = "users:manage"


# Permission matrix: role -> allowed operations
ROLE_PERMISSIONS = {
    UserRole.ADMIN: frozenset(Permission),
    UserRole.MANAGER: frozenset({
        Permission.COMPANY_VIEW,
        Permission.DEPARTMENT_CREATE,
        Permission.DEPARTMENT_VIEW,
        Permission.DEPARTMENT_UPDATE,
        Permission.EMPLOYEE_CREATE,
        Permission.EMPLOYEE_VIEW,
        Permission.EMPLOYEE_UPDATE,
        Permission.EMPLOYEE_CHANGE_STATUS,
    }),
    UserRole.EMPLOYEE: frozenset({
        Permission.EMPLOYEE_VIEW,
    }),
}


def has_permission(role: str, permission: Permission) -> bool:
    """Check if role has permission. Unknown roles have none."""
    try:
        role = UserRole(role)
    except ValueError:
        return False
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


# --- Passwords ---

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


# --- Tokens ---

def create_access_token(user_id: str, email: str, role: str) -> str:
    """
    Create a signed JWT for an authenticated user.

    Args:
        user_id: User id, stored as the subject
        email: User email
        role: User role, checked on every protected request

    Returns:
        JWT token string
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": str(role.value if isinstance(role, UserRole) else role),
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the token payload, or None if the token is invalid or expired."""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        return None


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user matching the credentials or raise UnauthorizedError."""
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login for {email}")
        raise UnauthorizedError("Invalid email or password")
    return user


# --- FastAPI dependencies ---

def get_token_from_header(request: Request) -> Optional[str]:
    """
    Extract JWT token from Authorization header.

    Expected format: "Bearer <token>"
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise UnauthorizedError("Invalid authorization header")

    return parts[1]


def get_current_payload(request: Request) -> Dict[str, Any]:
    """Verify the bearer token and return its payload."""
    token = get_token_from_header(request)
    if not token:
        raise UnauthorizedError("Missing authorization token")

    payload = decode_access_token(token)
    if not payload:
        raise UnauthorizedError("Invalid or expired token")

    return payload


def get_current_user(
    payload: Dict[str, Any] = Depends(get_current_payload),
    db: Session = Depends(get_db),
) -> User:
    user = db.query(User).filter(User.id == payload.get("sub")).first()
    if not user:
        raise UnauthorizedError("User no longer exists")
    return user


def require_permission(permission: Permission):
    """Build a dependency that allows the request only for permitted roles."""

    def checker(payload: Dict[str, Any] = Depends(get_current_payload)) -> Dict[str, Any]:
        role = payload.get("role", "")
        if not has_permission(role, permission):
            logger.warning(f"Role '{role}' denied {permission.value}")
            raise ForbiddenError(f"Missing permission: {permission.value}")
        return payload

    return checker
