"""
Pytest fixtures and configuration for the back-office tests

Nothing here touches a real database: repositories are exercised against
mocked psycopg2 connections and services against mocked repositories.
"""
import itertools
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from backoffice.domain.order import Order, CustomerProfile
from backoffice.domain.product import Product


@pytest.fixture
def make_product():
    """
    Factory for Product domain models

    Usage:
        product = make_product(stock_quantity=5, min_stock_level=10)
    """
    counter = itertools.count(1)

    def _make(**overrides) -> Product:
        n = next(counter)
        fields = {
            "id": f"prod-{n}",
            "title": f"Product {n}",
            "price": "199",
            "unit": "500g",
            "stock_quantity": 50,
            "min_stock_level": 10,
            "max_stock_level": 100,
            "created_at": datetime(2025, 1, 1, 12, 0) + timedelta(days=n),
        }
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def make_order():
    """
    Factory for Order domain models

    Each order gets a later created_at than the previous one unless given.
    """
    counter = itertools.count(1)

    def _make(**overrides) -> Order:
        n = next(counter)
        fields = {
            "id": f"order-{n}",
            "order_number": f"ORD-{1000 + n}",
            "status": "pending",
            "total": Decimal("100"),
            "created_at": datetime(2025, 1, 1, 9, 0) + timedelta(hours=n),
        }
        fields.update(overrides)
        return Order(**fields)

    return _make


@pytest.fixture
def sample_profile():
    return CustomerProfile(id="user-1", name="Asha Rao", email="asha@example.com")


@pytest.fixture
def sample_product_row():
    """A products table row as RealDictCursor returns it"""
    return {
        "id": "7b0c6a52-1f0e-4a57-9d1c-2f4a6f9c1e01",
        "title": "Cold Pressed Groundnut Oil",
        "price": "349",
        "unit": "1L",
        "image": "https://cdn.example.com/oil.jpg",
        "description": "Wood pressed",
        "full_description": None,
        "ingredients": "Groundnut",
        "usage_instructions": None,
        "stock_quantity": 8,
        "min_stock_level": 10,
        "max_stock_level": 100,
        "created_at": datetime(2025, 3, 1, 10, 0),
        "updated_at": None,
    }
