"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from backoffice.repositories.product_repository import ProductRepository
from backoffice.repositories.order_repository import OrderRepository
from backoffice.repositories.profile_repository import ProfileRepository

__all__ = [
    'ProductRepository',
    'OrderRepository',
    'ProfileRepository'
]
