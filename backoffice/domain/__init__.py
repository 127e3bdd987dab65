"""
Domain Layer - Business Entities

Pydantic models for products, orders and customer profiles.
These models enforce type safety and validation across the application.
"""
from backoffice.domain.product import Product, ProductCreate, ProductUpdate
from backoffice.domain.order import (
    Order,
    OrderItem,
    OrderSummary,
    OrderVisibilityUpdate,
    CustomerProfile,
)

__all__ = [
    'Product',
    'ProductCreate',
    'ProductUpdate',
    'Order',
    'OrderItem',
    'OrderSummary',
    'OrderVisibilityUpdate',
    'CustomerProfile',
]
