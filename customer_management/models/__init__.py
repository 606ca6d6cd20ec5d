"""SQLAlchemy models for customer management."""

from customer_management.models.customer import Customer

__all__ = [
    "Customer",
]
