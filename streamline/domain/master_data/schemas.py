"""Master data schemas - catalog shapes used by lookups and schedule details"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HostOption(BaseModel):
    id: int
    username: str
    displayName: str


class ProductOut(BaseModel):
    id: int
    sku: str
    name: str
    defaultPrice: float
    stock: int


class VoucherOut(BaseModel):
    id: int
    code: str
    description: Optional[str] = None
    discountType: str
    discountValue: float
    minPurchaseAmount: Optional[float] = None
    maxDiscountAmount: Optional[float] = None
    validFrom: Optional[datetime] = None
    validUntil: Optional[datetime] = None
    isActive: bool
