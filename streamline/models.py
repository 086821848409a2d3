import enum
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_schedule_id():
    """Generate a UUID primary key for schedules"""
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    HOST = "HOST"
    ADMIN = "ADMIN"


class Platform(str, enum.Enum):
    SHOPEE_LIVE = "SHOPEE_LIVE"
    TIKTOK_LIVE = "TIKTOK_LIVE"
    TOKOPEDIA_PLAY = "TOKOPEDIA_PLAY"
    LAZADA_LIVE = "LAZADA_LIVE"


class DiscountType(str, enum.Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=False)
    role = Column(String(20), default=UserRole.HOST.value, nullable=False)  # HOST, ADMIN
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    schedules = relationship("Schedule", back_populates="host")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(100), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    default_price = Column(Float, nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Voucher(Base):
    __tablename__ = "vouchers"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    discount_type = Column(String(20), default=DiscountType.PERCENTAGE.value, nullable=False)
    discount_value = Column(Float, default=0, nullable=False)
    min_purchase_amount = Column(Float, nullable=True)
    max_discount_amount = Column(Float, nullable=True)
    valid_from = Column(DateTime, server_default=func.now())
    valid_until = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(String(36), primary_key=True, default=generate_schedule_id)
    host_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String(255), nullable=False)
    platform = Column(String(30), nullable=False)  # SHOPEE_LIVE, TIKTOK_LIVE, TOKOPEDIA_PLAY, LAZADA_LIVE
    store_name = Column(String(255), nullable=False)
    # Naive local wall-clock time, never converted
    scheduled_at = Column(DateTime, index=True, nullable=False)
    sales_target = Column(Float, default=0, nullable=False)
    acknowledged_at = Column(DateTime, nullable=True)  # Set once by the host, never cleared
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    host = relationship("User", back_populates="schedules")
    products = relationship(
        "ScheduleProduct", back_populates="schedule", cascade="all, delete-orphan"
    )
    vouchers = relationship(
        "ScheduleVoucher", back_populates="schedule", cascade="all, delete-orphan"
    )
    talking_points = relationship(
        "TalkingPoint",
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="TalkingPoint.order",
    )


class ScheduleProduct(Base):
    __tablename__ = "schedule_products"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(
        String(36), ForeignKey("schedules.id", ondelete="CASCADE"), index=True, nullable=False
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    promo_price = Column(Float, nullable=False)

    schedule = relationship("Schedule", back_populates="products")
    product = relationship("Product")


class ScheduleVoucher(Base):
    __tablename__ = "schedule_vouchers"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(
        String(36), ForeignKey("schedules.id", ondelete="CASCADE"), index=True, nullable=False
    )
    voucher_id = Column(Integer, ForeignKey("vouchers.id"), nullable=False)

    schedule = relationship("Schedule", back_populates="vouchers")
    voucher = relationship("Voucher")


class TalkingPoint(Base):
    __tablename__ = "talking_points"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(
        String(36), ForeignKey("schedules.id", ondelete="CASCADE"), index=True, nullable=False
    )
    text = Column(Text, nullable=False)
    order = Column(Integer, nullable=False)  # 1-based position within the schedule

    schedule = relationship("Schedule", back_populates="talking_points")
