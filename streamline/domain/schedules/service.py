"""Schedule service - Host-facing briefing operations"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ...models import Schedule
from ...shared.errors import AlreadyAcknowledged, Forbidden, NotFound
from ...shared.validators import start_of_today
from .repository import ScheduleRepository
from .schemas import (
    AcknowledgeResult,
    BriefingProduct,
    BriefingVoucher,
    ScheduleBriefing,
    ScheduleSummary,
    TalkingPointOut,
)

logger = logging.getLogger(__name__)


def to_schedule_summary(schedule: Schedule) -> dict:
    return {
        "id": schedule.id,
        "title": schedule.title,
        "platform": schedule.platform,
        "storeName": schedule.store_name,
        "scheduledAt": schedule.scheduled_at,
        "salesTarget": schedule.sales_target,
        "acknowledgedAt": schedule.acknowledged_at,
    }


def ordered_talking_points(schedule: Schedule) -> list[TalkingPointOut]:
    points = sorted(schedule.talking_points, key=lambda tp: (tp.order, tp.id))
    return [TalkingPointOut(id=tp.id, text=tp.text, order=tp.order) for tp in points]


class ScheduleService:
    """Service layer for the authenticated host's own schedules"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository()

    def list_my_schedules(self, host_id: int) -> list[ScheduleSummary]:
        """Schedules from the start of today onwards, earliest first"""
        schedules = self.repo.get_host_schedules(self.db, host_id, start_of_today())
        return [ScheduleSummary(**to_schedule_summary(s)) for s in schedules]

    def get_owned_schedule(self, host_id: int, schedule_id: str, with_children: bool = False) -> Schedule:
        """Existence is checked before ownership: a missing id is always 404"""
        if with_children:
            schedule = self.repo.get_schedule_with_children(self.db, schedule_id)
        else:
            schedule = self.repo.get_schedule(self.db, schedule_id)

        if not schedule:
            raise NotFound("Schedule not found")

        if schedule.host_id != host_id:
            logger.warning(f"⚠️ Host {host_id} attempted to access schedule {schedule_id}")
            raise Forbidden("You do not have access to this schedule")

        return schedule

    def get_schedule_detail(self, host_id: int, schedule_id: str) -> ScheduleBriefing:
        """Full briefing: products with catalog prices, vouchers, ordered talking points"""
        schedule = self.get_owned_schedule(host_id, schedule_id, with_children=True)

        return ScheduleBriefing(
            **to_schedule_summary(schedule),
            products=[
                BriefingProduct(
                    id=sp.product.id,
                    sku=sp.product.sku,
                    name=sp.product.name,
                    defaultPrice=sp.product.default_price,
                    promoPrice=sp.promo_price,
                )
                for sp in schedule.products
            ],
            vouchers=[
                BriefingVoucher(
                    id=sv.voucher.id,
                    code=sv.voucher.code,
                    description=sv.voucher.description,
                    isActive=sv.voucher.is_active,
                )
                for sv in schedule.vouchers
            ],
            talkingPoints=ordered_talking_points(schedule),
        )

    def acknowledge(self, host_id: int, schedule_id: str) -> AcknowledgeResult:
        """
        Mark a briefing as read.

        The timestamp is set at most once; later calls fail with
        AlreadyAcknowledged carrying the stored timestamp.
        """
        schedule = self.get_owned_schedule(host_id, schedule_id)

        if schedule.acknowledged_at is None:
            if self.repo.mark_acknowledged(self.db, schedule_id, datetime.now()):
                logger.info(f"✅ Schedule {schedule_id} acknowledged by host {host_id}")
                # Commit expired the instance, so this reads the stored value
                return AcknowledgeResult(id=schedule.id, acknowledgedAt=schedule.acknowledged_at)
            # Lost the race to a concurrent acknowledge
            self.db.refresh(schedule)

        raise AlreadyAcknowledged(
            "Schedule was already acknowledged",
            data={"acknowledgedAt": schedule.acknowledged_at},
        )
