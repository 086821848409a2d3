"""Master data service - Lookup lists that populate the admin schedule form"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Product, User, Voucher
from .repository import MasterDataRepository
from .schemas import HostOption, ProductOut, VoucherOut


def to_host_option(user: User) -> HostOption:
    return HostOption(id=user.id, username=user.username, displayName=user.display_name)


def to_product_out(product: Product) -> ProductOut:
    return ProductOut(
        id=product.id,
        sku=product.sku,
        name=product.name,
        defaultPrice=product.default_price,
        stock=product.stock,
    )


def to_voucher_out(voucher: Voucher) -> VoucherOut:
    return VoucherOut(
        id=voucher.id,
        code=voucher.code,
        description=voucher.description,
        discountType=voucher.discount_type,
        discountValue=voucher.discount_value,
        minPurchaseAmount=voucher.min_purchase_amount,
        maxDiscountAmount=voucher.max_discount_amount,
        validFrom=voucher.valid_from,
        validUntil=voucher.valid_until,
        isActive=voucher.is_active,
    )


class MasterDataService:
    """Service layer for master data lookups"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MasterDataRepository()

    def list_hosts(self) -> list[HostOption]:
        return [to_host_option(u) for u in self.repo.get_hosts(self.db)]

    def list_products(self, search: Optional[str] = None) -> list[ProductOut]:
        search = search.strip() if search else None
        return [to_product_out(p) for p in self.repo.search_products(self.db, search)]

    def list_vouchers(self) -> list[VoucherOut]:
        return [to_voucher_out(v) for v in self.repo.get_active_vouchers(self.db)]
