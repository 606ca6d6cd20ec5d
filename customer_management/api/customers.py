"""Customer Management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status, Query

from customer_management.core.deps import get_customer_service
from customer_management.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerView,
    ErrorResponse,
)
from customer_management.services.customer_service import CustomerService
from customer_management.services.tier import MembershipTier

router = APIRouter(prefix="/api/customers", tags=["customers"])

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Customer not found"}}
CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "Email already in use"}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid input data"}}


@router.get("", response_model=list[CustomerView], responses=NOT_FOUND)
async def get_customers(
    name: str | None = Query(None, description="Customer name fragment to search for"),
    email: str | None = Query(None, description="Exact customer email"),
    service: CustomerService = Depends(get_customer_service),
):
    """List all customers, or filter by name fragment or exact email.

    ``name`` wins when both are given. An unknown email is a 404, not an
    empty list.
    """
    if name is not None:
        return await service.search_by_name(name)
    if email is not None:
        return [await service.get_by_email(email)]
    return await service.list_all()


@router.get("/tier/{tier}", response_model=list[CustomerView], responses=BAD_REQUEST)
async def get_customers_by_tier(
    tier: MembershipTier,
    service: CustomerService = Depends(get_customer_service),
):
    """Customers whose tier, computed right now, equals ``tier``."""
    return await service.list_by_tier(tier)


@router.get("/{customer_id}", response_model=CustomerView, responses=NOT_FOUND)
async def get_customer(
    customer_id: UUID,
    service: CustomerService = Depends(get_customer_service),
):
    """Get a single customer by ID."""
    return await service.get_by_id(customer_id)


@router.post(
    "",
    response_model=CustomerView,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **CONFLICT},
)
async def create_customer(
    body: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a new customer. The ID is always generated server-side."""
    return await service.create(body)


@router.put(
    "/{customer_id}",
    response_model=CustomerView,
    responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT},
)
async def update_customer(
    customer_id: UUID,
    body: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    """Replace a customer's name, email, spend and last purchase date."""
    return await service.update(customer_id, body)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_customer(
    customer_id: UUID,
    service: CustomerService = Depends(get_customer_service),
):
    """Delete a customer permanently."""
    await service.delete(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
