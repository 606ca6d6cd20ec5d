"""Dependency injection: builds the customer service per request."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from customer_management.db.base import get_db
from customer_management.services.customer_service import CustomerService
from customer_management.services.customer_store import SqlAlchemyCustomerStore
from customer_management.services.tier import MembershipTierCalculator


def get_tier_calculator() -> MembershipTierCalculator:
    return MembershipTierCalculator()


def get_customer_service(
    db: AsyncSession = Depends(get_db),
    calculator: MembershipTierCalculator = Depends(get_tier_calculator),
) -> CustomerService:
    return CustomerService(SqlAlchemyCustomerStore(db), calculator)
