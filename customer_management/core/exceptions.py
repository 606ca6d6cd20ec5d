"""Domain errors raised by the customer service.

The service never raises HTTP errors itself; ``main.py`` maps these to
status codes (not found → 404, duplicate email → 409).
"""

from uuid import UUID


class CustomerError(Exception):
    """Base class for customer domain failures."""


class CustomerNotFoundError(CustomerError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def for_id(cls, customer_id: UUID) -> "CustomerNotFoundError":
        return cls(f"Customer not found with id: {customer_id}")

    @classmethod
    def for_email(cls, email: str) -> "CustomerNotFoundError":
        return cls(f"Customer not found with email: {email}")


class DuplicateEmailError(CustomerError):
    def __init__(self, email: str):
        super().__init__(f"Customer with email {email} already exists")
        self.email = email
        self.message = str(self)
