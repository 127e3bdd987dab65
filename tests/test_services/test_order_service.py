"""
Unit tests for OrderService (repositories mocked)
"""
from datetime import datetime
from decimal import Decimal

import pytest
from unittest.mock import MagicMock

from backoffice.core.exceptions import OrderNotFound
from backoffice.domain.order import CustomerProfile
from backoffice.repositories.order_repository import OrderRepository
from backoffice.repositories.profile_repository import ProfileRepository
from backoffice.services.order_service import OrderService


@pytest.fixture
def repo():
    return MagicMock(spec=OrderRepository)


@pytest.fixture
def profile_repo():
    return MagicMock(spec=ProfileRepository)


@pytest.fixture
def service(repo, profile_repo):
    return OrderService(repository=repo, profile_repository=profile_repo)


def test_list_orders_summary_uses_unfiltered_set(service, repo, make_order):
    pending = make_order(status="pending", total=Decimal("10"))
    completed = make_order(status="completed", total=Decimal("30"))
    repo.find_all.return_value = [pending, completed]

    result = service.list_orders(status_filter="completed")

    assert result["orders"] == [completed]
    assert result["summary"].count == 2
    assert result["summary"].total_revenue == Decimal("40")


def test_list_orders_falls_back_on_bad_sort(service, repo, make_order, caplog):
    older = make_order(created_at=datetime(2025, 1, 1))
    newer = make_order(created_at=datetime(2025, 4, 1))
    repo.find_all.return_value = [older, newer]

    result = service.list_orders(sort_by="cheapest_first")

    assert result["orders"] == [newer, older]
    assert "falling back" in caplog.text


def test_list_orders_falls_back_on_bad_status(service, repo, make_order):
    orders = [make_order(status="pending"), make_order(status="completed")]
    repo.find_all.return_value = orders

    result = service.list_orders(status_filter="  ")

    assert len(result["orders"]) == 2


def test_sales_trend_is_chronological(service, repo, make_order):
    # Store returns newest first
    repo.find_all.return_value = [
        make_order(created_at=datetime(2025, 3, 2), total=Decimal("5")),
        make_order(created_at=datetime(2025, 2, 10), total=Decimal("7.5")),
        make_order(created_at=datetime(2025, 2, 1), total=Decimal("2.5")),
    ]

    trend = service.get_sales_trend()

    assert trend == {"labels": ["Feb 2025", "Mar 2025"], "data": [10.0, 5.0]}


def test_set_visibility_not_found(service, repo):
    repo.set_admin_visible.return_value = False

    with pytest.raises(OrderNotFound):
        service.set_visibility("missing", False)


def test_set_visibility(service, repo):
    repo.set_admin_visible.return_value = True

    service.set_visibility("order-1", False)

    repo.set_admin_visible.assert_called_once_with("order-1", False)


def test_list_profiles_search(service, profile_repo):
    asha = CustomerProfile(id="u-1", name="Asha", email="asha@example.com")
    ravi = CustomerProfile(id="u-2", name="Ravi", email="ravi@example.com")
    profile_repo.find_all.return_value = [asha, ravi]

    assert service.list_profiles(search="ravi") == [ravi]
