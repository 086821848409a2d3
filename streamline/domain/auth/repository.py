"""Auth repository - Database operations for users"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import User


class AuthRepository:
    """Repository for user lookups used by authentication"""

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()
