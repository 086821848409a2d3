"""Master data repository - Read-only lookups for admin forms"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Product, User, UserRole, Voucher


class MasterDataRepository:
    """Repository for host, product and voucher lookups"""

    @staticmethod
    def get_hosts(db: Session) -> list[User]:
        """Get all users with the HOST role"""
        return (
            db.query(User)
            .filter(User.role == UserRole.HOST.value)
            .order_by(User.display_name.asc())
            .all()
        )

    @staticmethod
    def search_products(db: Session, search: Optional[str] = None) -> list[Product]:
        """Get products, optionally matching sku or name case-insensitively"""
        query = db.query(Product)

        if search:
            # Literal substring: LIKE wildcards in the input match only themselves
            escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            search_term = f"%{escaped}%"
            query = query.filter(
                Product.sku.ilike(search_term, escape="\\") | Product.name.ilike(search_term, escape="\\")
            )

        return query.order_by(Product.name.asc()).all()

    @staticmethod
    def get_active_vouchers(db: Session) -> list[Voucher]:
        return (
            db.query(Voucher)
            .filter(Voucher.is_active.is_(True))
            .order_by(Voucher.code.asc())
            .all()
        )
