"""Schedule domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel

from ..master_data.schemas import HostOption, ProductOut, VoucherOut

# Form payloads arrive as numbers or numeric strings
NumberLike = Union[int, float, str]


# ============================================================================
# INPUT
# ============================================================================


class ScheduleProductInput(BaseModel):
    productId: Optional[NumberLike] = None
    promoPrice: Optional[NumberLike] = None


class ScheduleVoucherInput(BaseModel):
    voucherId: Optional[NumberLike] = None


class TalkingPointInput(BaseModel):
    text: Optional[str] = None
    order: Optional[NumberLike] = None


class ScheduleWrite(BaseModel):
    """
    Body for admin create and update.

    Required fields are checked by the service so a missing one produces a
    400 envelope. On update, absent child arrays are treated as empty.
    """

    hostId: Optional[NumberLike] = None
    title: Optional[str] = None
    platform: Optional[str] = None
    storeName: Optional[str] = None
    scheduledAt: Optional[str] = None
    salesTarget: Optional[NumberLike] = None
    products: Optional[list[ScheduleProductInput]] = None
    vouchers: Optional[list[ScheduleVoucherInput]] = None
    talkingPoints: Optional[list[TalkingPointInput]] = None


# ============================================================================
# OUTPUT
# ============================================================================


class ScheduleSummary(BaseModel):
    id: str
    title: str
    platform: str
    storeName: str
    scheduledAt: datetime
    salesTarget: float
    acknowledgedAt: Optional[datetime] = None


class BriefingProduct(BaseModel):
    id: int
    sku: str
    name: str
    defaultPrice: float
    promoPrice: float


class BriefingVoucher(BaseModel):
    id: int
    code: str
    description: Optional[str] = None
    isActive: bool


class TalkingPointOut(BaseModel):
    id: int
    text: str
    order: int


class ScheduleBriefing(ScheduleSummary):
    products: list[BriefingProduct]
    vouchers: list[BriefingVoucher]
    talkingPoints: list[TalkingPointOut]


class AcknowledgeResult(BaseModel):
    id: str
    acknowledgedAt: datetime


class AdminScheduleSummary(ScheduleSummary):
    host: HostOption


class AdminScheduleProduct(BaseModel):
    productId: int
    promoPrice: float
    product: ProductOut


class AdminScheduleVoucher(BaseModel):
    voucherId: int
    voucher: VoucherOut


class AdminScheduleDetail(AdminScheduleSummary):
    hostId: int
    products: list[AdminScheduleProduct]
    vouchers: list[AdminScheduleVoucher]
    talkingPoints: list[TalkingPointOut]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
