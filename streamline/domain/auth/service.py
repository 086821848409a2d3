"""Auth service - Login and current-user lookup"""

import logging

from sqlalchemy.orm import Session

from ...models import User
from ...security_utils import create_access_token, verify_password_bcrypt
from ...shared.errors import InvalidCredentials, NotFound, ValidationError
from ...shared.validators import is_blank
from .repository import AuthRepository
from .schemas import LoginRequest, LoginResponse, UserProfile, UserPublic


logger = logging.getLogger(__name__)


def to_user_public(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,
        username=user.username,
        displayName=user.display_name,
        role=user.role,
    )


class AuthService:
    """Service layer for authentication"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AuthRepository()

    def login(self, data: LoginRequest) -> LoginResponse:
        """Check credentials and issue a signed access token"""
        if is_blank(data.username) or is_blank(data.password):
            raise ValidationError("Username and password are required")

        user = self.repo.get_user_by_username(self.db, data.username)

        # Unknown users still pay for a hash comparison
        password_hash = user.password_hash if user else None
        if not verify_password_bcrypt(data.password, password_hash) or not user:
            logger.warning(f"⚠️ Failed login attempt for username: {data.username}")
            raise InvalidCredentials()

        token = create_access_token(
            {"userId": user.id, "username": user.username, "role": user.role}
        )
        logger.info(f"✅ User logged in: {user.username} ({user.role})")
        return LoginResponse(token=token, user=to_user_public(user))

    def get_current_user(self, user_id: int) -> UserProfile:
        """Public profile of the authenticated user"""
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFound("User not found")

        return UserProfile(
            id=user.id,
            username=user.username,
            displayName=user.display_name,
            role=user.role,
            createdAt=user.created_at,
        )
