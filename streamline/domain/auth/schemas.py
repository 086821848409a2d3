"""Auth domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Login body; presence is checked by the service to return a 400 envelope"""

    username: Optional[str] = None
    password: Optional[str] = None


class TokenClaims(BaseModel):
    """Signed identity attached to authenticated requests"""

    userId: int
    username: str
    role: str


class UserPublic(BaseModel):
    id: int
    username: str
    displayName: str
    role: str


class UserProfile(UserPublic):
    createdAt: Optional[datetime] = None


class LoginResponse(BaseModel):
    token: str
    user: UserPublic
