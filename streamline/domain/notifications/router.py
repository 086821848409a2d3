"""Notification router - Reminder poll endpoint for hosts"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_token_claims
from ...database import get_db
from ...shared.responses import success_response
from ..auth.schemas import TokenClaims
from .service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)


@router.get("/upcoming")
async def get_upcoming(
    minutesBefore: Optional[int] = Query(None, description="Look-ahead window in minutes"),
    claims: TokenClaims = Depends(get_token_claims),
    service: NotificationService = Depends(get_notification_service),
):
    """Get the caller's schedules starting within the next ``minutesBefore`` minutes"""
    return success_response(service.list_upcoming(claims.userId, minutesBefore))
