"""Customer model."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from customer_management.db.base import Base
from customer_management.db.types import UTCDateTime
from customer_management.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Customer(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # unique index is the authoritative duplicate-email guard
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    annual_spend: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    last_purchase_date: Mapped[datetime | None] = mapped_column(UTCDateTime)

    # membership tier is derived on read and has no column

    def __repr__(self) -> str:
        return f"<Customer {self.email}>"
