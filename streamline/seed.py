"""
Demo data seeder
Usage: python -m streamline.seed

Wipes every table and recreates two hosts, one admin, a product catalog,
vouchers and three schedules for today.
"""

import logging
import sys
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from .database import Database
from .models import (
    Platform,
    Product,
    Schedule,
    ScheduleProduct,
    ScheduleVoucher,
    TalkingPoint,
    User,
    UserRole,
    Voucher,
    generate_schedule_id,
)
from .security_utils import hash_password_bcrypt

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"  # noqa: S105 - demo accounts only

PRODUCTS = [
    ("GROGLO-SERUM-001", "Groglo Whitening Serum 30ml", 199000),
    ("GROGLO-CREAM-001", "Groglo Night Cream 50ml", 149000),
    ("GROGLO-TONER-001", "Groglo Rose Toner 100ml", 89000),
    ("TKIS-PILLOW-001", "TKIS Memory Foam Pillow", 299000),
    ("TKIS-BEDSHEET-001", "TKIS Premium Bedsheet Set", 599000),
]

VOUCHERS = [
    ("GGMG1111", "11% off every Groglo product", "PERCENTAGE", 11),
    ("FLASHSALE50", "Free shipping, min. spend Rp 50.000", "FIXED_AMOUNT", 50000),
    ("NEWUSER20", "Rp 20.000 off for new users", "FIXED_AMOUNT", 20000),
    ("CASHBACK100", "Rp 100.000 cashback, min. spend Rp 500.000", "FIXED_AMOUNT", 100000),
]


def clear_data(db: Session) -> None:
    # Reverse dependency order
    for model in (TalkingPoint, ScheduleVoucher, ScheduleProduct, Schedule, Voucher, Product, User):
        db.query(model).delete()
    db.commit()
    logger.info("✅ Cleared existing data")


def seed(db: Session, today: Optional[datetime] = None) -> dict:
    """Insert the demo data set and return the created users keyed by username"""
    password_hash = hash_password_bcrypt(DEMO_PASSWORD)

    users = {
        "siti": User(username="siti", password_hash=password_hash, display_name="Siti Nurhaliza", role=UserRole.HOST.value),
        "rina": User(username="rina", password_hash=password_hash, display_name="Rina Wati", role=UserRole.HOST.value),
        "admin": User(username="admin", password_hash=password_hash, display_name="Admin Streamline", role=UserRole.ADMIN.value),
    }
    db.add_all(users.values())

    products = [Product(sku=sku, name=name, default_price=price, stock=100) for sku, name, price in PRODUCTS]
    db.add_all(products)

    vouchers = [
        Voucher(code=code, description=description, discount_type=kind, discount_value=value, is_active=True)
        for code, description, kind, value in VOUCHERS
    ]
    db.add_all(vouchers)
    db.flush()
    logger.info("✅ Created users (2 hosts + 1 admin), products and vouchers")

    # Today at 10:00 local time
    base = (today or datetime.now()).replace(hour=10, minute=0, second=0, microsecond=0)

    schedule_plans = [
        {
            "host": users["siti"],
            "title": "Flash Sale Groglo 11.11! 🔥",
            "platform": Platform.SHOPEE_LIVE.value,
            "store_name": "GROGLO_BEAUTY",
            "scheduled_at": base,
            "sales_target": 5000000,
            "products": [(products[0], 99000), (products[1], 99000), (products[2], 49000)],
            "vouchers": [vouchers[0], vouchers[1]],
            "talking_points": [
                "Highlight: the Groglo serum is this month's #1 best seller! 🏆",
                "Promo: buy 2, get a free Night Cream for the first 100 buyers!",
                'Testimonial: "My skin was glowing within 7 days!" - @beauty_lover99',
                "Call to action: remind viewers to use voucher GGMG1111 for an extra discount!",
            ],
        },
        {
            "host": users["siti"],
            "title": "TKIS Home Living Special",
            "platform": Platform.TIKTOK_LIVE.value,
            "store_name": "TKIS_HOME_LIVING",
            "scheduled_at": base + timedelta(hours=4),
            "sales_target": 3000000,
            "products": [(products[3], 199000), (products[4], 399000)],
            "vouchers": [vouchers[1], vouchers[3]],
            "talking_points": [
                "The memory foam pillow suits viewers with neck and back pain",
                "Premium bedsheets made from 100% Egyptian cotton",
                "Free shipping on every order today!",
            ],
        },
        {
            "host": users["rina"],
            "title": "Bedtime Beauty Sale 🌙",
            "platform": Platform.SHOPEE_LIVE.value,
            "store_name": "GROGLO_BEAUTY",
            "scheduled_at": base + timedelta(hours=8),
            "sales_target": 7000000,
            "acknowledged_at": datetime.now(),
            "products": [(products[0], 149000), (products[1], 119000)],
            "vouchers": [vouchers[0], vouchers[2]],
            "talking_points": [
                "Night routine special: serum + night cream bundle for glowing skin!",
                "Target: 100 orders before 21:00 unlocks a mystery gift!",
                "Reminder: ask viewers about their skincare concerns",
            ],
        },
    ]

    for plan in schedule_plans:
        schedule = Schedule(
            id=generate_schedule_id(),
            host=plan["host"],
            title=plan["title"],
            platform=plan["platform"],
            store_name=plan["store_name"],
            scheduled_at=plan["scheduled_at"],
            sales_target=plan["sales_target"],
            acknowledged_at=plan.get("acknowledged_at"),
        )
        schedule.products = [ScheduleProduct(product=p, promo_price=price) for p, price in plan["products"]]
        schedule.vouchers = [ScheduleVoucher(voucher=v) for v in plan["vouchers"]]
        schedule.talking_points = [
            TalkingPoint(text=text, order=position) for position, text in enumerate(plan["talking_points"], start=1)
        ]
        db.add(schedule)

    db.commit()
    logger.info("✅ Created 3 schedules with products, vouchers and talking points")
    return users


def run(database: Database) -> None:
    database.open()
    try:
        database.create_all()
        db = database.session()
        try:
            clear_data(db)
            seed(db)
        finally:
            db.close()
    finally:
        database.close()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        run(Database())
    except Exception:
        logger.exception("❌ Seed failed")
        sys.exit(1)

    logger.info("\n🎉 Seed completed successfully!\n")
    logger.info("🔐 Login credentials:")
    logger.info(f"   Host: siti | Password: {DEMO_PASSWORD}")
    logger.info(f"   Host: rina | Password: {DEMO_PASSWORD}")
    logger.info(f"   Admin: admin | Password: {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
