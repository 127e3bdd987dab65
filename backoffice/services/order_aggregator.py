"""
Order Aggregator - filtering, sorting and statistics over orders

All functions take the full order collection plus explicit criteria and
return new values. Nothing here mutates its input or keeps state between
calls, so the same list can feed the order table, the stats cards and the
sales chart.
"""
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from backoffice.core.exceptions import InvalidArgument
from backoffice.domain.order import Order, OrderSummary

ALL_STATUSES = "all"

# Fixed English abbreviations so labels don't depend on the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class OrderSort(str, Enum):
    """Supported order table sort keys"""
    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    AMOUNT_DESC = "amount_desc"
    AMOUNT_ASC = "amount_asc"


def summarize(orders: Iterable[Order]) -> OrderSummary:
    """
    Order statistics for the admin dashboard

    Only visible orders are counted (admin_visible explicitly False excludes).
    Missing totals count as 0 and the average is 0 when there is nothing to
    average.

    Returns:
        OrderSummary with count, total_revenue, average_order_value and
        status_counts
    """
    count = 0
    total_revenue = Decimal('0')
    status_counts: Dict[str, int] = {}

    for order in orders:
        if not order.is_visible:
            continue
        count += 1
        total_revenue += order.amount
        status_counts[order.status] = status_counts.get(order.status, 0) + 1

    average = total_revenue / count if count > 0 else Decimal('0')

    return OrderSummary(
        count=count,
        total_revenue=total_revenue,
        average_order_value=average,
        status_counts=status_counts,
    )


def _searchable_fields(order: Order) -> Tuple[Optional[str], ...]:
    profile = order.profile
    return (
        order.order_number,
        profile.name if profile else None,
        order.customer_name,
        profile.email if profile else None,
        order.customer_email,
        order.customer_phone,
    )


def matches_search(order: Order, search_term: str) -> bool:
    """
    Case-insensitive substring match on order number, customer name,
    customer email (profile and checkout snapshot) and phone
    """
    term = search_term.strip().lower()
    if not term:
        return True
    return any(value and term in value.lower() for value in _searchable_fields(order))


def _coerce_sort(sort_by: Union[OrderSort, str]) -> OrderSort:
    try:
        return OrderSort(sort_by)
    except ValueError:
        raise InvalidArgument(
            f"Unknown sort_by {sort_by!r}; expected one of {[s.value for s in OrderSort]}"
        ) from None


def _validate_status_filter(status_filter) -> str:
    if not isinstance(status_filter, str) or not status_filter.strip():
        raise InvalidArgument(f"status_filter must be a non-empty string, got {status_filter!r}")
    return status_filter


def filter_and_sort(
    orders: Sequence[Order],
    status_filter: str = ALL_STATUSES,
    search_term: Optional[str] = "",
    sort_by: Union[OrderSort, str] = OrderSort.DATE_DESC,
) -> List[Order]:
    """
    Orders table view: status filter, then search, then sort

    Args:
        orders: Full order collection (left untouched)
        status_filter: "all" or an exact, case-sensitive status value
        search_term: Free text; blank means no search
        sort_by: date_desc, date_asc, amount_desc or amount_asc

    Returns:
        New list. The sort is stable, so ties keep their relative order.

    Raises:
        InvalidArgument: unknown sort_by or malformed status_filter
    """
    sort_key = _coerce_sort(sort_by)
    status_filter = _validate_status_filter(status_filter)

    filtered = list(orders)

    if status_filter != ALL_STATUSES:
        filtered = [order for order in filtered if order.status == status_filter]

    if search_term and search_term.strip():
        filtered = [order for order in filtered if matches_search(order, search_term)]

    if sort_key in (OrderSort.DATE_DESC, OrderSort.DATE_ASC):
        return sorted(
            filtered,
            key=lambda order: order.created_at,
            reverse=sort_key is OrderSort.DATE_DESC,
        )

    return sorted(
        filtered,
        key=lambda order: order.amount,
        reverse=sort_key is OrderSort.AMOUNT_DESC,
    )


def month_label(order: Order) -> str:
    """e.g. "Mar 2025" """
    created = order.created_at
    return f"{MONTH_ABBREVIATIONS[created.month - 1]} {created.year}"


def group_revenue_by_month(orders: Iterable[Order]) -> List[Tuple[str, Decimal]]:
    """
    Sales trend series: revenue per month label

    Every order counts regardless of visibility. Labels appear in order of
    first occurrence, so pass chronologically sorted orders for a
    chronological series.
    """
    revenue_by_month: Dict[str, Decimal] = {}

    for order in orders:
        label = month_label(order)
        revenue_by_month[label] = revenue_by_month.get(label, Decimal('0')) + order.amount

    return list(revenue_by_month.items())
