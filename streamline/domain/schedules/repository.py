"""Schedule repository - Database operations for schedules and their children"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import (
    Product,
    Schedule,
    ScheduleProduct,
    ScheduleVoucher,
    TalkingPoint,
    User,
    Voucher,
)


def _with_children(query):
    return query.options(
        joinedload(Schedule.host),
        selectinload(Schedule.products).joinedload(ScheduleProduct.product),
        selectinload(Schedule.vouchers).joinedload(ScheduleVoucher.voucher),
        selectinload(Schedule.talking_points),
    )


class ScheduleRepository:
    """Repository for schedule database operations"""

    @staticmethod
    def get_schedule(db: Session, schedule_id: str) -> Optional[Schedule]:
        """Get a schedule without its children"""
        return db.query(Schedule).filter(Schedule.id == schedule_id).first()

    @staticmethod
    def get_schedule_with_children(db: Session, schedule_id: str) -> Optional[Schedule]:
        """Get a schedule with host, products, vouchers and talking points"""
        return _with_children(db.query(Schedule)).filter(Schedule.id == schedule_id).first()

    @staticmethod
    def get_host_schedules(
        db: Session,
        host_id: int,
        start: datetime,
        end: Optional[datetime] = None,
    ) -> list[Schedule]:
        """Get a host's schedules starting at or after ``start`` (and up to ``end``)"""
        query = db.query(Schedule).filter(Schedule.host_id == host_id, Schedule.scheduled_at >= start)
        if end is not None:
            query = query.filter(Schedule.scheduled_at <= end)
        return query.order_by(Schedule.scheduled_at.asc()).all()

    @staticmethod
    def search_schedules(
        db: Session,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        host_id: Optional[int] = None,
        platform: Optional[str] = None,
    ) -> list[Schedule]:
        """Search all schedules with optional date range, host and platform filters"""
        query = db.query(Schedule).options(joinedload(Schedule.host))

        if start is not None:
            query = query.filter(Schedule.scheduled_at >= start)

        if end is not None:
            query = query.filter(Schedule.scheduled_at <= end)

        if host_id is not None:
            query = query.filter(Schedule.host_id == host_id)

        if platform:
            query = query.filter(Schedule.platform == platform)

        return query.order_by(Schedule.scheduled_at.asc()).all()

    @staticmethod
    def mark_acknowledged(db: Session, schedule_id: str, acknowledged_at: datetime) -> bool:
        """
        Set acknowledged_at only if it is still NULL.

        Returns True when this call set the timestamp.
        """
        updated = (
            db.query(Schedule)
            .filter(Schedule.id == schedule_id, Schedule.acknowledged_at.is_(None))
            .update({Schedule.acknowledged_at: acknowledged_at}, synchronize_session=False)
        )
        db.commit()
        return updated == 1

    @staticmethod
    def delete_children(db: Session, schedule_id: str) -> None:
        """Delete every product, voucher and talking point row of a schedule (no commit)"""
        db.query(ScheduleProduct).filter(ScheduleProduct.schedule_id == schedule_id).delete(
            synchronize_session=False
        )
        db.query(ScheduleVoucher).filter(ScheduleVoucher.schedule_id == schedule_id).delete(
            synchronize_session=False
        )
        db.query(TalkingPoint).filter(TalkingPoint.schedule_id == schedule_id).delete(
            synchronize_session=False
        )

    @staticmethod
    def add_children(
        db: Session,
        schedule_id: str,
        products: Iterable[tuple[int, float]],
        voucher_ids: Iterable[int],
        talking_points: Iterable[tuple[str, int]],
    ) -> None:
        """Stage new child rows for a schedule (no commit)"""
        for product_id, promo_price in products:
            db.add(ScheduleProduct(schedule_id=schedule_id, product_id=product_id, promo_price=promo_price))
        for voucher_id in voucher_ids:
            db.add(ScheduleVoucher(schedule_id=schedule_id, voucher_id=voucher_id))
        for text, order in talking_points:
            db.add(TalkingPoint(schedule_id=schedule_id, text=text, order=order))

    @staticmethod
    def delete_schedule(db: Session, schedule: Schedule) -> None:
        """Delete a schedule; children go with it through the cascade"""
        db.delete(schedule)
        db.commit()

    # Reference checks
    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def missing_product_ids(db: Session, product_ids: set[int]) -> set[int]:
        if not product_ids:
            return set()
        found = db.query(Product.id).filter(Product.id.in_(product_ids)).all()
        return product_ids - {row[0] for row in found}

    @staticmethod
    def missing_voucher_ids(db: Session, voucher_ids: set[int]) -> set[int]:
        if not voucher_ids:
            return set()
        found = db.query(Voucher.id).filter(Voucher.id.in_(voucher_ids)).all()
        return voucher_ids - {row[0] for row in found}
