"""Customer service: CRUD lifecycle plus the derived membership tier.

The tier is computed every time a view is built and never written back.
Each call captures a single ``now`` so every customer in one listing is
evaluated against the same instant.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from customer_management.core.exceptions import CustomerNotFoundError, DuplicateEmailError
from customer_management.models.customer import Customer
from customer_management.schemas.customer import CustomerCreate, CustomerUpdate, CustomerView
from customer_management.services.customer_store import CustomerStore
from customer_management.services.tier import MembershipTier, MembershipTierCalculator

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, store: CustomerStore, calculator: MembershipTierCalculator):
        self.store = store
        self.calculator = calculator

    # ── reads ─────────────────────────────────────

    async def list_all(self) -> list[CustomerView]:
        customers = await self.store.list_all()
        return self._to_views(customers)

    async def get_by_id(self, customer_id: UUID) -> CustomerView:
        customer = await self._require(customer_id)
        return self.to_view(customer)

    async def get_by_email(self, email: str) -> CustomerView:
        customer = await self.store.find_by_email(email)
        if customer is None:
            raise CustomerNotFoundError.for_email(email)
        return self.to_view(customer)

    async def search_by_name(self, fragment: str) -> list[CustomerView]:
        customers = await self.store.search_by_name(fragment)
        return self._to_views(customers)

    async def list_by_tier(self, tier: MembershipTier) -> list[CustomerView]:
        """Full scan: the tier is not stored, so it cannot be queried."""
        now = self.calculator.now()
        customers = await self.store.list_all()
        return [
            self.to_view(c, now)
            for c in customers
            if self.calculator.calculate(c, now) == tier
        ]

    # ── writes ────────────────────────────────────

    async def create(self, data: CustomerCreate) -> CustomerView:
        if await self.store.exists_by_email(data.email):
            logger.warning("Rejected create: email %s already registered", data.email)
            raise DuplicateEmailError(data.email)

        # id is always generated here, never taken from the caller
        customer = Customer(
            name=data.name,
            email=data.email,
            annual_spend=data.annual_spend,
            last_purchase_date=data.last_purchase_date,
        )
        try:
            customer = await self.store.add(customer)
        except IntegrityError as exc:
            # lost the race against a concurrent insert of the same email
            logger.warning("Create for %s hit the unique email constraint", data.email)
            raise DuplicateEmailError(data.email) from exc

        logger.info("Customer created: id=%s email=%s", customer.id, customer.email)
        return self.to_view(customer)

    async def update(self, customer_id: UUID, data: CustomerUpdate) -> CustomerView:
        customer = await self._require(customer_id)

        if await self.store.exists_by_email_excluding(data.email, customer_id):
            logger.warning(
                "Rejected update of %s: email %s belongs to another customer",
                customer_id, data.email,
            )
            raise DuplicateEmailError(data.email)

        customer.name = data.name
        customer.email = data.email
        customer.annual_spend = data.annual_spend
        customer.last_purchase_date = data.last_purchase_date
        try:
            customer = await self.store.save(customer)
        except IntegrityError as exc:
            logger.warning("Update of %s hit the unique email constraint", customer_id)
            raise DuplicateEmailError(data.email) from exc

        logger.info("Customer updated: id=%s", customer.id)
        return self.to_view(customer)

    async def delete(self, customer_id: UUID) -> None:
        customer = await self._require(customer_id)
        await self.store.delete(customer)
        logger.info("Customer deleted: id=%s", customer_id)

    # ── helpers ───────────────────────────────────

    async def _require(self, customer_id: UUID) -> Customer:
        customer = await self.store.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError.for_id(customer_id)
        return customer

    def to_view(self, customer: Customer, now: datetime | None = None) -> CustomerView:
        return CustomerView(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            annual_spend=customer.annual_spend,
            last_purchase_date=customer.last_purchase_date,
            membership_tier=self.calculator.calculate(customer, now),
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )

    def _to_views(self, customers: list[Customer]) -> list[CustomerView]:
        now = self.calculator.now()
        return [self.to_view(c, now) for c in customers]
