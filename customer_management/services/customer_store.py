"""Customer persistence.

``CustomerStore`` is the contract the service depends on;
``SqlAlchemyCustomerStore`` is the implementation backed by an
``AsyncSession``. Each write commits immediately so a request is one unit of
work per operation.
"""

import logging
from typing import Protocol
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from customer_management.models.customer import Customer

logger = logging.getLogger(__name__)


class CustomerStore(Protocol):
    async def list_all(self) -> list[Customer]: ...

    async def get(self, customer_id: UUID) -> Customer | None: ...

    async def find_by_email(self, email: str) -> Customer | None: ...

    async def search_by_name(self, fragment: str) -> list[Customer]: ...

    async def exists_by_email(self, email: str) -> bool: ...

    async def exists_by_email_excluding(self, email: str, customer_id: UUID) -> bool: ...

    async def add(self, customer: Customer) -> Customer: ...

    async def save(self, customer: Customer) -> Customer: ...

    async def delete(self, customer: Customer) -> None: ...


def _escape_like(fragment: str) -> str:
    return fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyCustomerStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list[Customer]:
        result = await self.session.execute(select(Customer))
        return list(result.scalars().all())

    async def get(self, customer_id: UUID) -> Customer | None:
        result = await self.session.execute(
            select(Customer).where(Customer.id == customer_id)
        )
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Customer | None:
        result = await self.session.execute(
            select(Customer).where(Customer.email == email)
        )
        return result.scalar_one_or_none()

    async def search_by_name(self, fragment: str) -> list[Customer]:
        pattern = f"%{_escape_like(fragment)}%"
        result = await self.session.execute(
            select(Customer).where(Customer.name.like(pattern, escape="\\"))
        )
        return list(result.scalars().all())

    async def exists_by_email(self, email: str) -> bool:
        result = await self.session.execute(
            select(exists().where(Customer.email == email))
        )
        return bool(result.scalar())

    async def exists_by_email_excluding(self, email: str, customer_id: UUID) -> bool:
        result = await self.session.execute(
            select(
                exists().where(
                    Customer.email == email,
                    Customer.id != customer_id,
                )
            )
        )
        return bool(result.scalar())

    async def add(self, customer: Customer) -> Customer:
        self.session.add(customer)
        await self._commit()
        await self.session.refresh(customer)
        return customer

    async def save(self, customer: Customer) -> Customer:
        await self._commit()
        await self.session.refresh(customer)
        return customer

    async def delete(self, customer: Customer) -> None:
        await self.session.delete(customer)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning("Customer write rejected by database constraint, rolled back")
            raise
