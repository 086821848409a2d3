import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from .database import get_db
from .domain.auth.repository import AuthRepository
from .domain.auth.schemas import TokenClaims
from .models import User, UserRole
from .security_utils import TokenExpired, TokenInvalid, decode_access_token
from .shared.errors import Forbidden, InternalError, Unauthorized

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets our envelope instead of FastAPI's 403
security = HTTPBearer(auto_error=False)


def verify_token(token: str) -> TokenClaims:
    """Decode a bearer token into its signed claims"""
    try:
        payload = decode_access_token(token)
    except TokenExpired as e:
        logger.info("ℹ️ Rejected expired token")
        raise Unauthorized(
            "Token has expired. Please log in again.",
            headers={"X-Token-Expired": "true"},
        ) from e
    except TokenInvalid as e:
        logger.warning(f"⚠️ Rejected invalid token: {e}")
        raise Unauthorized("Invalid token.") from e
    except Exception as e:
        logger.exception(f"❌ Token verification failed unexpectedly: {type(e).__name__}")
        raise InternalError() from e

    try:
        return TokenClaims(**payload)
    except PydanticValidationError as e:
        logger.warning(f"⚠️ Token missing required claims. Available claims: {list(payload.keys())}")
        raise Unauthorized("Invalid token.") from e


async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenClaims:
    """
    Identity for host routes: exactly the token's signed claims.

    No database lookup happens here, so the role is the one the token was
    issued with.
    """
    if not credentials or not credentials.credentials:
        raise Unauthorized("Token not found. Please log in first.")

    return verify_token(credentials.credentials)


async def get_current_admin(
    claims: TokenClaims = Depends(get_token_claims),
    db: Session = Depends(get_db),
) -> User:
    """
    Identity for admin routes.

    Re-reads the user so a role change applies before the token expires.
    """
    user = AuthRepository.get_user_by_id(db, claims.userId)
    if not user:
        logger.warning(f"⚠️ Token for deleted user {claims.userId} used on admin route")
        raise Unauthorized("User not found")

    if user.role != UserRole.ADMIN.value:
        logger.warning(f"⚠️ User {user.username} ({user.role}) attempted to access an admin route")
        raise Forbidden("Access denied. Only admins can access this resource.")

    return user
