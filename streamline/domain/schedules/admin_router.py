"""Admin schedule router - Full CRUD over every host's schedules"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...shared.responses import success_response
from .admin_service import AdminScheduleService
from .schemas import ScheduleWrite

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin/schedules",
    tags=["Admin Schedules"],
    dependencies=[Depends(get_current_admin)],
)


def get_admin_schedule_service(db: Session = Depends(get_db)) -> AdminScheduleService:
    """Dependency injection for AdminScheduleService"""
    return AdminScheduleService(db)


@router.get("")
async def get_all_schedules(
    date: Optional[str] = Query(None, description="Local calendar day, YYYY-MM-DD"),
    hostId: Optional[str] = Query(None),
    platform: Optional[str] = Query(None),
    service: AdminScheduleService = Depends(get_admin_schedule_service),
):
    """Get all schedules with host info, earliest first"""
    return success_response(service.list_all(date=date, host_id=hostId, platform=platform))


@router.get("/{schedule_id}")
async def get_schedule_by_id(
    schedule_id: str,
    service: AdminScheduleService = Depends(get_admin_schedule_service),
):
    """Get a schedule with every nested relation (for the edit form)"""
    return success_response(service.get_by_id(schedule_id))


@router.post("", status_code=201)
async def create_schedule(
    data: ScheduleWrite,
    service: AdminScheduleService = Depends(get_admin_schedule_service),
):
    """Create a schedule with nested products, vouchers and talking points"""
    return success_response(service.create(data), message="Schedule created")


@router.put("/{schedule_id}")
async def update_schedule(
    schedule_id: str,
    data: ScheduleWrite,
    service: AdminScheduleService = Depends(get_admin_schedule_service),
):
    """Update a schedule, replacing all of its products, vouchers and talking points"""
    return success_response(service.update(schedule_id, data), message="Schedule updated")


@router.delete("/{schedule_id}")
async def delete_schedule(
    schedule_id: str,
    service: AdminScheduleService = Depends(get_admin_schedule_service),
):
    """Delete a schedule and its children"""
    service.delete(schedule_id)
    return success_response(message="Schedule deleted")
