"""Seed sample customers for local development.

One customer per tier scenario:
┌─────────────────┬────────┬───────────────┬──────────┐
│ Customer        │ Spend  │ Last purchase │ Tier     │
├─────────────────┼────────┼───────────────┼──────────┤
│ Alice Johnson   │    800 │ 30 days ago   │ SILVER   │
│ Bob Smith       │  2,500 │ 8 months ago  │ GOLD     │
│ Carol Williams  │ 15,000 │ 3 months ago  │ PLATINUM │
│ David Brown     │ 12,000 │ 18 months ago │ SILVER   │
│ Eva Davis       │  3,000 │ 15 months ago │ SILVER   │
│ Frank Miller    │  5,000 │ never         │ SILVER   │
└─────────────────┴────────┴───────────────┴──────────┘

Never invoked when ENVIRONMENT is production.
"""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from customer_management.models.customer import Customer

logger = logging.getLogger(__name__)


def sample_customers(now: datetime) -> list[Customer]:
    return [
        Customer(
            name="Alice Johnson",
            email="alice.johnson@example.com",
            annual_spend=Decimal("800"),
            last_purchase_date=now - timedelta(days=30),
        ),
        Customer(
            name="Bob Smith",
            email="bob.smith@example.com",
            annual_spend=Decimal("2500"),
            last_purchase_date=now - relativedelta(months=8),
        ),
        Customer(
            name="Carol Williams",
            email="carol.williams@example.com",
            annual_spend=Decimal("15000"),
            last_purchase_date=now - relativedelta(months=3),
        ),
        Customer(
            name="David Brown",
            email="david.brown@example.com",
            annual_spend=Decimal("12000"),
            last_purchase_date=now - relativedelta(months=18),
        ),
        Customer(
            name="Eva Davis",
            email="eva.davis@example.com",
            annual_spend=Decimal("3000"),
            last_purchase_date=now - relativedelta(months=15),
        ),
        Customer(
            name="Frank Miller",
            email="frank.miller@example.com",
            annual_spend=Decimal("5000"),
            last_purchase_date=None,
        ),
    ]


async def seed_sample_customers(session: AsyncSession, now: datetime | None = None) -> int:
    """Insert the sample set into an empty table. Returns rows inserted."""
    count = (await session.execute(select(func.count()).select_from(Customer))).scalar_one()
    if count:
        logger.info("Customer table already has %d rows, skipping seed", count)
        return 0

    customers = sample_customers(now or datetime.now(timezone.utc))
    session.add_all(customers)
    await session.commit()
    logger.info("Seeded %d sample customers", len(customers))
    return len(customers)


async def seed_on_startup(bind: AsyncEngine, session_factory: async_sessionmaker) -> int:
    """Seed only when the schema is in place; an unmigrated DB is logged, not fatal."""
    async with bind.connect() as conn:
        has_table = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).has_table(Customer.__tablename__)
        )
    if not has_table:
        logger.warning(
            "Table %r missing, skipping sample data. Run `alembic upgrade head` "
            "or set CREATE_TABLES_ON_STARTUP=true.",
            Customer.__tablename__,
        )
        return 0

    async with session_factory() as session:
        return await seed_sample_customers(session)
