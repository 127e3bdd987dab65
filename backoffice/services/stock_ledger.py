"""
Stock Ledger - quantity mutation rules and stock status classification

Pure functions only: no database access, no hidden state. The caller reads
the authoritative quantity, calls apply_stock_change, and persists the result
(see ProductRepository.update_stock for the locked read-modify-write).
"""
from enum import Enum
from typing import Iterable, List, Union

from backoffice.core.exceptions import InvalidArgument, InvariantViolation

QUICK_ADD_AMOUNT = 10


class StockOperation(str, Enum):
    """How an amount is applied to the current quantity"""
    ADD = "add"
    SUBTRACT = "subtract"
    SET = "set"


class StockStatus(str, Enum):
    """Derived stock classification, never stored"""
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


ALERT_STATUSES = (StockStatus.LOW_STOCK, StockStatus.OUT_OF_STOCK)


def _require_int(value, name: str) -> None:
    # bool is an int subclass; True/False are never valid quantities
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")


def _coerce_operation(operation: Union[StockOperation, str]) -> StockOperation:
    try:
        return StockOperation(operation)
    except ValueError:
        raise InvalidArgument(
            f"Unknown stock operation {operation!r}; "
            f"expected one of {[op.value for op in StockOperation]}"
        ) from None


def apply_stock_change(
    current_quantity: int,
    amount: int,
    operation: Union[StockOperation, str],
) -> int:
    """
    Compute the new stock quantity for a product

    Args:
        current_quantity: Authoritative quantity read just before the call (>= 0)
        amount: Units to add/subtract, or the absolute value for "set" (>= 0)
        operation: "add", "subtract" or "set"

    Returns:
        New quantity, always >= 0. Subtracting more than is on hand clamps
        to 0 instead of failing.

    Raises:
        InvalidArgument: negative or non-integer amount, unknown operation
        InvariantViolation: current_quantity is negative (corrupt stored data)
    """
    op = _coerce_operation(operation)
    _require_int(amount, "amount")
    _require_int(current_quantity, "current_quantity")

    if amount < 0:
        raise InvalidArgument(f"amount must be >= 0 for '{op.value}', got {amount}")
    if current_quantity < 0:
        raise InvariantViolation(
            f"Stored stock quantity is negative ({current_quantity}); refusing to compute"
        )

    if op is StockOperation.ADD:
        return current_quantity + amount
    if op is StockOperation.SUBTRACT:
        return max(0, current_quantity - amount)
    return amount


def quick_add_10(current_quantity: int) -> int:
    """Restock shortcut: add 10 units"""
    return apply_stock_change(current_quantity, QUICK_ADD_AMOUNT, StockOperation.ADD)


def mark_out_of_stock(current_quantity: int) -> int:
    """Set the quantity to 0"""
    return apply_stock_change(current_quantity, 0, StockOperation.SET)


def classify(quantity: int, min_stock_level: int) -> StockStatus:
    """
    Three-way stock status

    out_of_stock when nothing is on hand, low_stock when at or below the
    minimum level, in_stock otherwise.
    """
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= min_stock_level:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def select_low_stock(products: Iterable) -> List:
    """Products needing a restock (low or out of stock), in input order"""
    return [product for product in products if product.stock_status in ALERT_STATUSES]


def summarize_stock(products: Iterable) -> dict:
    """
    Stock overview counters for the admin dashboard

    Returns:
        Dict with total_products, in_stock, low_stock, out_of_stock and
        total_units (sum of on-hand quantities)
    """
    overview = {
        "total_products": 0,
        StockStatus.IN_STOCK.value: 0,
        StockStatus.LOW_STOCK.value: 0,
        StockStatus.OUT_OF_STOCK.value: 0,
        "total_units": 0,
    }

    for product in products:
        overview["total_products"] += 1
        overview[product.stock_status.value] += 1
        overview["total_units"] += max(0, product.stock_quantity)

    return overview
