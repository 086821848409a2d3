"""Schedule router - Host endpoints for briefings"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_token_claims
from ...database import get_db
from ...shared.responses import success_response
from ..auth.schemas import TokenClaims
from .service import ScheduleService

router = APIRouter(prefix="/api/schedules", tags=["Schedules"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db)


@router.get("")
async def get_schedules(
    claims: TokenClaims = Depends(get_token_claims),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get the caller's schedules from today onwards"""
    return success_response(service.list_my_schedules(claims.userId))


@router.get("/{schedule_id}")
async def get_schedule_detail(
    schedule_id: str,
    claims: TokenClaims = Depends(get_token_claims),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get the full briefing for one of the caller's schedules"""
    return success_response(service.get_schedule_detail(claims.userId, schedule_id))


@router.post("/{schedule_id}/acknowledge")
async def acknowledge_schedule(
    schedule_id: str,
    claims: TokenClaims = Depends(get_token_claims),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Mark a briefing as read (only the first call succeeds)"""
    result = service.acknowledge(claims.userId, schedule_id)
    return success_response(result, message="Schedule acknowledged")
