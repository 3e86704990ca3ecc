# eventa/errors.py
from typing import Optional


class EventaError(Exception):
    """Base class for every failure a screen may have to show the user."""

    title = "Error"

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self):
        return self.detail


class NetworkError(EventaError):
    """The backend could not be reached or did not answer in time."""


class InputValidationError(EventaError):
    """Missing or malformed input caught before any request is sent."""


class NotFoundError(EventaError):
    pass


class AuthenticationError(EventaError):
    """Missing, expired or rejected bearer token."""

    title = "Notice"


class BusinessRuleError(EventaError):
    """The request was well formed but the backend (or a local check) refused it."""


class SaleClosedError(BusinessRuleError):
    pass


class InsufficientInventoryError(BusinessRuleError):
    def __init__(self, ticket_type: str, available: int):
        super().__init__(f"Only {available} {ticket_type} tickets left")
        self.ticket_type = ticket_type
        self.available = available


class InvalidDiscountError(BusinessRuleError):
    pass
