"""Notification schemas - reminder poll responses"""

from ..schedules.schemas import ScheduleSummary


class UpcomingSchedule(ScheduleSummary):
    minutesUntilStart: int
