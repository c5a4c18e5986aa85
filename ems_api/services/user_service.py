"""User account service"""
from typing import List

from sqlalchemy.orm import Session

from ems_api.auth import hash_password
from ems_api.exceptions import ConflictError
from ems_api.logger import get_logger
from ems_api.models import User, UserRole

logger = get_logger(__name__)


class UserService:
    """Service for managing login accounts"""

    def __init__(self, db: Session):
        self.db = db

    def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.EMPLOYEE,
    ) -> User:
        """
        Register a new user.

        Raises:
            ConflictError: If the email is already registered
        """
        if self.db.query(User).filter(User.email == email).first():
            raise ConflictError(f"User with email {email} already exists")

        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"User created: {email} ({role.value})")
        return user

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at).all()
