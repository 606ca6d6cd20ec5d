"""Customer schemas for API request/response.

Wire format is camelCase (``annualSpend``, ``lastPurchaseDate``,
``membershipTier``); snake_case names are accepted on input as well.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from email_validator import validate_email
from pydantic import AfterValidator, AwareDatetime, BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from customer_management.services.tier import MembershipTier


def _check_email(value: str) -> str:
    # format check only: the address is stored and matched exactly as sent
    validate_email(value, check_deliverability=False)
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailAddress
    annual_spend: Decimal | None = Field(None, max_digits=10, decimal_places=2)
    last_purchase_date: AwareDatetime | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v


class CustomerCreate(CustomerBase):
    """Create payload. A client-supplied ``id`` is an unknown field and dropped."""


class CustomerUpdate(CustomerBase):
    """Full replacement of the mutable fields (PUT semantics)."""


class CustomerView(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    email: str
    annual_spend: Decimal | None = None
    last_purchase_date: datetime | None = None
    membership_tier: MembershipTier
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("annual_spend", when_used="json")
    def _spend_as_number(self, v: Decimal | None) -> float | None:
        return float(v) if v is not None else None


class ErrorResponse(BaseModel):
    detail: str
