from customer_management.schemas.customer import (
    CustomerCreate, CustomerUpdate, CustomerView, ErrorResponse,
)

__all__ = [
    "CustomerCreate", "CustomerUpdate", "CustomerView", "ErrorResponse",
]
