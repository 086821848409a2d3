"""Reminder lookup - which of the host's schedules start soon"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...config import REMINDER_MINUTES_BEFORE
from ...shared.errors import ValidationError
from ..schedules.repository import ScheduleRepository
from ..schedules.service import to_schedule_summary
from .schemas import UpcomingSchedule

logger = logging.getLogger(__name__)

MAX_WINDOW_MINUTES = 24 * 60


class NotificationService:
    """Answers the client's reminder poll; delivery is the client's concern"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository()

    def list_upcoming(
        self,
        host_id: int,
        within_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[UpcomingSchedule]:
        within = REMINDER_MINUTES_BEFORE if within_minutes is None else within_minutes
        if not 1 <= within <= MAX_WINDOW_MINUTES:
            raise ValidationError(f"minutesBefore must be between 1 and {MAX_WINDOW_MINUTES}")

        now = now or datetime.now()
        schedules = self.repo.get_host_schedules(
            self.db, host_id, start=now, end=now + timedelta(minutes=within)
        )
        return [
            UpcomingSchedule(
                **to_schedule_summary(s),
                minutesUntilStart=int((s.scheduled_at - now).total_seconds() // 60),
            )
            for s in schedules
        ]
