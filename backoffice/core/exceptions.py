"""
Back-office error hierarchy

Every error raised by the stock and order logic derives from BackofficeError.
Routers translate these into HTTP responses; nothing in the core retries.
"""
from typing import Optional


class BackofficeError(Exception):
    """
    Base exception for all back-office errors

    Catch this to handle any failure raised by the domain logic.
    """

    #: Stable error code for programmatic handling (API responses, logs)
    code: str = "backoffice_error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "An unspecified back-office error occurred."
        super().__init__(message)


class InvalidArgument(BackofficeError, ValueError):
    """
    Raised for caller mistakes: a negative stock amount, an unknown stock
    operation, or a malformed sort/status filter.

    Callers are expected to fall back to a safe default (e.g. "all" /
    "date_desc") instead of propagating this to the end user.
    """

    code: str = "invalid_argument"


class InvariantViolation(BackofficeError):
    """
    Raised when stored data breaks an invariant, e.g. a negative stock quantity.

    Indicates upstream corruption. Must be surfaced to an operator, never
    silently repaired.
    """

    code: str = "invariant_violation"


class ProductNotFound(BackofficeError, LookupError):
    """Raised when a product id does not exist in the store"""

    code: str = "product_not_found"


class OrderNotFound(BackofficeError, LookupError):
    """Raised when an order id does not exist in the store"""

    code: str = "order_not_found"
