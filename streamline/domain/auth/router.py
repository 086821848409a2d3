"""Auth router - FastAPI endpoints for login and identity"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_token_claims
from ...database import get_db
from ...shared.responses import success_response
from .schemas import LoginRequest, TokenClaims
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/login")
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange username/password for a 24h bearer token"""
    result = service.login(data)
    return success_response(result, message="Login successful")


@router.get("/me")
async def get_me(
    claims: TokenClaims = Depends(get_token_claims),
    service: AuthService = Depends(get_auth_service),
):
    """Get the profile of the token's user"""
    return success_response(service.get_current_user(claims.userId))
