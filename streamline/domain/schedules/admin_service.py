"""Schedule admin service - CRUD over all schedules and their nested children"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Platform, Schedule, generate_schedule_id
from ...shared.errors import InternalError, NotFound, ValidationError
from ...shared.validators import (
    is_blank,
    local_day_range,
    parse_int,
    parse_local_datetime,
    parse_number,
)
from ..master_data.service import to_host_option, to_product_out, to_voucher_out
from .repository import ScheduleRepository
from .schemas import (
    AdminScheduleDetail,
    AdminScheduleProduct,
    AdminScheduleSummary,
    AdminScheduleVoucher,
    ScheduleProductInput,
    ScheduleVoucherInput,
    ScheduleWrite,
    TalkingPointInput,
)
from .service import ordered_talking_points, to_schedule_summary

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("hostId", "title", "platform", "storeName", "scheduledAt")
PLATFORMS = {p.value for p in Platform}


def to_admin_summary(schedule: Schedule) -> dict:
    return {**to_schedule_summary(schedule), "host": to_host_option(schedule.host)}


def to_admin_detail(schedule: Schedule) -> AdminScheduleDetail:
    return AdminScheduleDetail(
        **to_admin_summary(schedule),
        hostId=schedule.host_id,
        products=[
            AdminScheduleProduct(
                productId=sp.product_id,
                promoPrice=sp.promo_price,
                product=to_product_out(sp.product),
            )
            for sp in schedule.products
        ],
        vouchers=[
            AdminScheduleVoucher(voucherId=sv.voucher_id, voucher=to_voucher_out(sv.voucher))
            for sv in schedule.vouchers
        ],
        talkingPoints=ordered_talking_points(schedule),
        createdAt=schedule.created_at,
        updatedAt=schedule.updated_at,
    )


class AdminScheduleService:
    """Service layer for admin schedule management"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_all(
        self,
        date: Optional[str] = None,
        host_id: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> list[AdminScheduleSummary]:
        """All schedules, optionally narrowed to one local day, host or platform"""
        start = end = None
        if not is_blank(date):
            day_range = local_day_range(date)
            if day_range is None:
                raise ValidationError("Invalid date, expected YYYY-MM-DD")
            start, end = day_range

        host_filter = None
        if not is_blank(host_id):
            host_filter = parse_int(host_id)
            if host_filter is None:
                raise ValidationError("Invalid hostId")

        platform_filter = None
        if not is_blank(platform):
            platform_filter = self._parse_platform(platform)

        schedules = self.repo.search_schedules(
            self.db, start=start, end=end, host_id=host_filter, platform=platform_filter
        )
        return [AdminScheduleSummary(**to_admin_summary(s)) for s in schedules]

    def get_by_id(self, schedule_id: str) -> AdminScheduleDetail:
        schedule = self.repo.get_schedule_with_children(self.db, schedule_id)
        if not schedule:
            raise NotFound("Schedule not found")
        return to_admin_detail(schedule)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, data: ScheduleWrite) -> AdminScheduleDetail:
        """Insert a schedule together with its products, vouchers and talking points"""
        missing = [name for name in REQUIRED_FIELDS if is_blank(getattr(data, name))]
        if missing:
            raise ValidationError(f"Incomplete schedule data: {', '.join(missing)} required")

        host_id = self._parse_host_id(data.hostId)
        products = self._parse_products(data.products or [])
        voucher_ids = self._parse_vouchers(data.vouchers or [])
        talking_points = self._parse_talking_points(data.talkingPoints or [])
        self._check_references(host_id, products, voucher_ids)

        schedule = Schedule(
            id=generate_schedule_id(),
            host_id=host_id,
            title=data.title.strip(),
            platform=self._parse_platform(data.platform),
            store_name=data.storeName.strip(),
            scheduled_at=self._parse_scheduled_at(data.scheduledAt),
            sales_target=parse_number(data.salesTarget, default=0.0),
        )

        try:
            self.db.add(schedule)
            self.repo.add_children(self.db, schedule.id, products, voucher_ids, talking_points)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create schedule for host {host_id}: {e}")
            raise InternalError("Failed to create schedule") from e

        logger.info(
            f"📅 Created schedule {schedule.id} for host {host_id} "
            f"({len(products)} products, {len(voucher_ids)} vouchers, {len(talking_points)} talking points)"
        )
        return self.get_by_id(schedule.id)

    def update(self, schedule_id: str, data: ScheduleWrite) -> AdminScheduleDetail:
        """
        Update scalar fields and replace all children in one transaction.

        Scalars change only when their key is present and non-empty. Child
        collections are always replaced by the submitted arrays, and an absent
        array counts as empty, so omitting ``products`` clears them.
        """
        schedule = self.repo.get_schedule(self.db, schedule_id)
        if not schedule:
            raise NotFound("Schedule not found")

        updates = self._scalar_updates(data)
        products = self._parse_products(data.products or [])
        voucher_ids = self._parse_vouchers(data.vouchers or [])
        talking_points = self._parse_talking_points(data.talkingPoints or [])
        self._check_references(updates.get("host_id"), products, voucher_ids)

        try:
            self.repo.delete_children(self.db, schedule.id)
            for key, value in updates.items():
                setattr(schedule, key, value)
            self.repo.add_children(self.db, schedule.id, products, voucher_ids, talking_points)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update schedule {schedule_id}: {e}")
            raise InternalError("Failed to update schedule") from e

        logger.info(f"📅 Updated schedule {schedule_id} (fields: {sorted(updates) or 'none'})")
        return self.get_by_id(schedule_id)

    def delete(self, schedule_id: str) -> None:
        schedule = self.repo.get_schedule(self.db, schedule_id)
        if not schedule:
            raise NotFound("Schedule not found")

        host_id = schedule.host_id
        try:
            self.repo.delete_schedule(self.db, schedule)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete schedule {schedule_id}: {e}")
            raise InternalError("Failed to delete schedule") from e

        logger.info(f"🗑️ Deleted schedule {schedule_id} for host {host_id}")

    # ------------------------------------------------------------------
    # Payload parsing
    # ------------------------------------------------------------------

    def _scalar_updates(self, data: ScheduleWrite) -> dict[str, Any]:
        updates: dict[str, Any] = {}
        if not is_blank(data.hostId):
            updates["host_id"] = self._parse_host_id(data.hostId)
        if not is_blank(data.title):
            updates["title"] = data.title.strip()
        if not is_blank(data.platform):
            updates["platform"] = self._parse_platform(data.platform)
        if not is_blank(data.storeName):
            updates["store_name"] = data.storeName.strip()
        if not is_blank(data.scheduledAt):
            updates["scheduled_at"] = self._parse_scheduled_at(data.scheduledAt)
        if "salesTarget" in data.model_fields_set and data.salesTarget is not None:
            updates["sales_target"] = parse_number(data.salesTarget, default=0.0)
        return updates

    @staticmethod
    def _parse_host_id(value: Any) -> int:
        host_id = parse_int(value)
        if host_id is None:
            raise ValidationError("Invalid hostId")
        return host_id

    @staticmethod
    def _parse_platform(value: str) -> str:
        platform = value.strip()
        if platform not in PLATFORMS:
            raise ValidationError(f"Invalid platform, expected one of: {', '.join(sorted(PLATFORMS))}")
        return platform

    @staticmethod
    def _parse_scheduled_at(value: str):
        scheduled_at = parse_local_datetime(value)
        if scheduled_at is None:
            raise ValidationError("Invalid scheduledAt, expected an ISO-8601 date and time")
        return scheduled_at

    @staticmethod
    def _parse_products(items: list[ScheduleProductInput]) -> list[tuple[int, float]]:
        products = []
        for item in items:
            product_id = parse_int(item.productId)
            if product_id is None:
                raise ValidationError("Every product needs a valid productId")
            promo_price = parse_number(item.promoPrice, default=None)
            if promo_price is None:
                raise ValidationError(f"Invalid promoPrice for product {product_id}")
            products.append((product_id, promo_price))
        return products

    @staticmethod
    def _parse_vouchers(items: list[ScheduleVoucherInput]) -> list[int]:
        voucher_ids = []
        for item in items:
            voucher_id = parse_int(item.voucherId)
            if voucher_id is None:
                raise ValidationError("Every voucher needs a valid voucherId")
            voucher_ids.append(voucher_id)
        return voucher_ids

    @staticmethod
    def _parse_talking_points(items: list[TalkingPointInput]) -> list[tuple[str, int]]:
        points = []
        for position, item in enumerate(items, start=1):
            if is_blank(item.text):
                raise ValidationError(f"Talking point {position} has no text")
            order = parse_int(item.order)
            points.append((item.text.strip(), order if order is not None else position))
        return points

    def _check_references(
        self,
        host_id: Optional[int],
        products: list[tuple[int, float]],
        voucher_ids: list[int],
    ) -> None:
        if host_id is not None and not self.repo.get_user(self.db, host_id):
            raise ValidationError(f"Host {host_id} not found")

        missing_products = self.repo.missing_product_ids(self.db, {p[0] for p in products})
        if missing_products:
            raise ValidationError(f"Unknown productId: {', '.join(map(str, sorted(missing_products)))}")

        missing_vouchers = self.repo.missing_voucher_ids(self.db, set(voucher_ids))
        if missing_vouchers:
            raise ValidationError(f"Unknown voucherId: {', '.join(map(str, sorted(missing_vouchers)))}")
