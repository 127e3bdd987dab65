"""
Unit tests for order filtering, sorting and statistics
"""
from datetime import datetime
from decimal import Decimal

import pytest

from backoffice.core.exceptions import InvalidArgument
from backoffice.domain.order import CustomerProfile
from backoffice.services.order_aggregator import (
    filter_and_sort,
    group_revenue_by_month,
    matches_search,
    summarize,
)


class TestSummarize:

    def test_empty_collection(self):
        summary = summarize([])

        assert summary.count == 0
        assert summary.total_revenue == 0
        assert summary.average_order_value == 0
        assert summary.status_counts == {}

    def test_hidden_orders_excluded(self, make_order):
        orders = [
            make_order(total=Decimal("100"), admin_visible=True),
            make_order(total=Decimal("50"), admin_visible=False),
        ]

        summary = summarize(orders)

        assert summary.count == 1
        assert summary.total_revenue == 100
        assert summary.average_order_value == 100

    def test_null_visibility_counts_as_visible(self, make_order):
        summary = summarize([make_order(admin_visible=None)])
        assert summary.count == 1

    def test_missing_total_counts_as_zero(self, make_order):
        orders = [make_order(total=None), make_order(total=Decimal("90"))]

        summary = summarize(orders)

        assert summary.total_revenue == Decimal("90")
        assert summary.average_order_value == Decimal("45")

    def test_status_counts_accept_new_statuses(self, make_order):
        orders = [
            make_order(status="pending"),
            make_order(status="completed"),
            make_order(status="pending"),
            make_order(status="out_for_delivery"),
            make_order(status="cancelled", admin_visible=False),
        ]

        summary = summarize(orders)

        assert summary.status_counts == {"pending": 2, "completed": 1, "out_for_delivery": 1}

    def test_only_hidden_orders_gives_zero_average(self, make_order):
        summary = summarize([make_order(admin_visible=False)])

        assert summary.count == 0
        assert summary.average_order_value == 0

    def test_to_dict_uses_floats(self, make_order):
        data = summarize([make_order(total=Decimal("10.50"))]).to_dict()

        assert data == {
            "count": 1,
            "total_revenue": 10.5,
            "average_order_value": 10.5,
            "status_counts": {"pending": 1},
        }


class TestFilterAndSort:

    def test_status_filter_exact(self, make_order):
        pending = make_order(status="pending")
        completed = make_order(status="completed")

        assert filter_and_sort([pending, completed], status_filter="completed") == [completed]

    def test_status_filter_is_case_sensitive(self, make_order):
        orders = [make_order(status="completed")]
        assert filter_and_sort(orders, status_filter="Completed") == []

    def test_all_keeps_everything(self, make_order):
        orders = [make_order(status="pending"), make_order(status="completed")]
        assert len(filter_and_sort(orders, status_filter="all")) == 2

    def test_search_matches_snapshot_email(self, make_order):
        order = make_order(order_number="A1", customer_email="x@y.com")

        assert filter_and_sort([order], search_term="X@Y") == [order]
        assert filter_and_sort([order], search_term="z@y") == []

    def test_search_matches_profile_name(self, make_order, sample_profile):
        order = make_order(profile=sample_profile, customer_name=None)

        assert filter_and_sort([order], search_term="asha") == [order]

    def test_search_matches_snapshot_name_even_with_profile(self, make_order, sample_profile):
        order = make_order(profile=sample_profile, customer_name="Guest Buyer")

        assert filter_and_sort([order], search_term="guest") == [order]

    def test_search_matches_phone_and_order_number(self, make_order):
        by_phone = make_order(order_number="ORD-1", customer_phone="+91 98450 12345")
        by_number = make_order(order_number="ORD-98450")

        result = filter_and_sort([by_phone, by_number], search_term="98450", sort_by="date_asc")

        assert result == [by_phone, by_number]

    def test_search_term_is_trimmed(self, make_order):
        order = make_order(order_number="ORD-77")
        assert filter_and_sort([order], search_term="  ord-77  ") == [order]

    def test_blank_search_keeps_everything(self, make_order):
        orders = [make_order(), make_order()]
        assert len(filter_and_sort(orders, search_term="   ")) == 2

    def test_absent_fields_never_match(self, make_order):
        order = make_order(order_number=None, customer_name=None, customer_email=None,
                           customer_phone=None, profile=None)

        assert filter_and_sort([order], search_term="a") == []

    def test_profile_without_name_or_email_is_skipped(self, make_order):
        order = make_order(order_number="N-1", profile=CustomerProfile(id="user-9"))
        assert matches_search(order, "user-9") is False

    def test_date_desc_is_default(self, make_order):
        older = make_order(created_at=datetime(2025, 1, 1))
        newer = make_order(created_at=datetime(2025, 2, 1))

        assert filter_and_sort([older, newer]) == [newer, older]

    def test_date_asc(self, make_order):
        older = make_order(created_at=datetime(2025, 1, 1))
        newer = make_order(created_at=datetime(2025, 2, 1))

        assert filter_and_sort([newer, older], sort_by="date_asc") == [older, newer]

    def test_amount_sorts_treat_missing_as_zero(self, make_order):
        small = make_order(total=Decimal("5"))
        missing = make_order(total=None)
        big = make_order(total=Decimal("500"))

        assert filter_and_sort([small, missing, big], sort_by="amount_desc") == [big, small, missing]
        assert filter_and_sort([small, missing, big], sort_by="amount_asc") == [missing, small, big]

    @pytest.mark.parametrize("sort_by", ["amount_desc", "amount_asc"])
    def test_amount_sort_is_stable(self, make_order, sort_by):
        first = make_order(total=Decimal("40"))
        second = make_order(total=Decimal("40"))
        third = make_order(total=Decimal("40"))

        assert filter_and_sort([first, second, third], sort_by=sort_by) == [first, second, third]

    def test_date_sort_is_stable(self, make_order):
        same_time = datetime(2025, 5, 5, 10, 0)
        first = make_order(created_at=same_time)
        second = make_order(created_at=same_time)

        assert filter_and_sort([first, second], sort_by="date_desc") == [first, second]

    def test_input_not_mutated(self, make_order):
        orders = [
            make_order(total=Decimal("1"), status="pending"),
            make_order(total=Decimal("3"), status="completed"),
            make_order(total=Decimal("2"), status="pending"),
        ]
        snapshot = list(orders)

        result = filter_and_sort(orders, status_filter="pending", sort_by="amount_desc")

        assert orders == snapshot
        assert result is not orders

    def test_unknown_sort_rejected(self, make_order):
        with pytest.raises(InvalidArgument):
            filter_and_sort([make_order()], sort_by="price_desc")

    @pytest.mark.parametrize("status_filter", ["", "   ", None, 3])
    def test_malformed_status_filter_rejected(self, make_order, status_filter):
        with pytest.raises(InvalidArgument):
            filter_and_sort([make_order()], status_filter=status_filter)


class TestGroupRevenueByMonth:

    def test_buckets_by_month_label(self, make_order):
        orders = [
            make_order(created_at=datetime(2025, 1, 3), total=Decimal("100")),
            make_order(created_at=datetime(2025, 1, 28), total=Decimal("50")),
            make_order(created_at=datetime(2025, 2, 1), total=Decimal("20")),
        ]

        assert group_revenue_by_month(orders) == [
            ("Jan 2025", Decimal("150")),
            ("Feb 2025", Decimal("20")),
        ]

    def test_first_occurrence_order(self, make_order):
        orders = [
            make_order(created_at=datetime(2025, 3, 1)),
            make_order(created_at=datetime(2024, 12, 1)),
            make_order(created_at=datetime(2025, 3, 9)),
        ]

        labels = [label for label, _ in group_revenue_by_month(orders)]

        assert labels == ["Mar 2025", "Dec 2024"]

    def test_includes_hidden_orders_and_missing_totals(self, make_order):
        orders = [
            make_order(created_at=datetime(2025, 6, 1), total=Decimal("10"), admin_visible=False),
            make_order(created_at=datetime(2025, 6, 2), total=None),
        ]

        assert group_revenue_by_month(orders) == [("Jun 2025", Decimal("10"))]

    def test_empty(self):
        assert group_revenue_by_month([]) == []
