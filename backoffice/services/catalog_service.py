"""
Catalog search helpers for the admin product and customer tables
"""
from typing import Iterable, List, Optional

from backoffice.domain.order import CustomerProfile
from backoffice.domain.product import Product


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term in value.lower()


def filter_products(products: Iterable[Product], search_term: Optional[str]) -> List[Product]:
    """Products whose title, unit or description contains the term (case-insensitive)"""
    if not search_term or not search_term.strip():
        return list(products)

    term = search_term.strip().lower()
    return [
        product for product in products
        if _contains(product.title, term)
        or _contains(product.unit, term)
        or _contains(product.description, term)
    ]


def filter_profiles(profiles: Iterable[CustomerProfile], search_term: Optional[str]) -> List[CustomerProfile]:
    """Profiles whose name, email or id contains the term (case-insensitive)"""
    if not search_term or not search_term.strip():
        return list(profiles)

    term = search_term.strip().lower()
    return [
        profile for profile in profiles
        if _contains(profile.name, term)
        or _contains(profile.email, term)
        or _contains(profile.id, term)
    ]
