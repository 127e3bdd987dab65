"""
Order Service - order table, statistics and sales trend for the admin

Loads the full order collection once per request and hands it to the order
aggregator with the caller's criteria.
"""
import logging
from typing import Dict, List, Optional

from backoffice.core.exceptions import InvalidArgument, OrderNotFound
from backoffice.domain.order import CustomerProfile, OrderSummary
from backoffice.repositories.order_repository import OrderRepository
from backoffice.repositories.profile_repository import ProfileRepository
from backoffice.services import order_aggregator
from backoffice.services.catalog_service import filter_profiles
from backoffice.services.order_aggregator import ALL_STATUSES, OrderSort

logger = logging.getLogger(__name__)


class OrderService:
    """Service for order queries and statistics"""

    def __init__(
        self,
        repository: Optional[OrderRepository] = None,
        profile_repository: Optional[ProfileRepository] = None
    ):
        self.repository = repository or OrderRepository()
        self.profile_repository = profile_repository or ProfileRepository()

    def list_orders(
        self,
        status_filter: str = ALL_STATUSES,
        search_term: str = "",
        sort_by: str = OrderSort.DATE_DESC.value
    ) -> Dict:
        """
        Filtered and sorted orders plus statistics over the whole collection

        Malformed sort_by/status_filter values fall back to date_desc/all
        instead of failing the page.

        Returns:
            Dict with "orders" (filtered list) and "summary" (unfiltered stats)
        """
        orders = self.repository.find_all()

        try:
            OrderSort(sort_by)
        except ValueError:
            logger.warning(f"Unknown sort_by {sort_by!r}, falling back to {OrderSort.DATE_DESC.value}")
            sort_by = OrderSort.DATE_DESC

        try:
            filtered = order_aggregator.filter_and_sort(orders, status_filter, search_term, sort_by)
        except InvalidArgument as e:
            logger.warning(f"{e}; falling back to status_filter={ALL_STATUSES!r}")
            filtered = order_aggregator.filter_and_sort(orders, ALL_STATUSES, search_term, sort_by)

        return {
            "orders": filtered,
            "summary": order_aggregator.summarize(orders),
        }

    def get_stats(self) -> OrderSummary:
        return order_aggregator.summarize(self.repository.find_all())

    def get_sales_trend(self) -> Dict[str, List]:
        """
        Revenue per month, oldest month first

        Orders come back newest first from the store, so they are sorted
        ascending before bucketing.
        """
        orders = order_aggregator.filter_and_sort(
            self.repository.find_all(), sort_by=OrderSort.DATE_ASC
        )
        series = order_aggregator.group_revenue_by_month(orders)
        return {
            "labels": [label for label, _ in series],
            "data": [float(total) for _, total in series],
        }

    def set_visibility(self, order_id: str, visible: bool) -> None:
        if not self.repository.set_admin_visible(order_id, visible):
            raise OrderNotFound(f"Order {order_id} not found")
        logger.info(f"Order {order_id} admin_visible set to {visible}")

    def list_profiles(self, search: Optional[str] = None) -> List[CustomerProfile]:
        return filter_profiles(self.profile_repository.find_all(), search)
