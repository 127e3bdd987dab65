"""
Inventory Service - product catalog and stock management

Wraps ProductRepository around the stock ledger rules. Stock changes run as a
locked read-modify-write in the repository, with the ledger computing the new
quantity inside the transaction.
"""
import logging
from typing import Callable, Dict, List, Optional, Union

from backoffice.core.exceptions import InvariantViolation, ProductNotFound
from backoffice.domain.product import Product, ProductCreate, ProductUpdate
from backoffice.repositories.product_repository import ProductRepository
from backoffice.services import stock_ledger
from backoffice.services.catalog_service import filter_products
from backoffice.services.stock_ledger import StockOperation

logger = logging.getLogger(__name__)


class InventoryService:
    """Service for catalog and stock business logic"""

    def __init__(self, repository: Optional[ProductRepository] = None):
        self.repository = repository or ProductRepository()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_products(self, search: Optional[str] = None) -> List[Product]:
        """All products, newest first, optionally narrowed by a search term"""
        return filter_products(self.repository.find_all(), search)

    def get_product(self, product_id: str) -> Product:
        product = self.repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found")
        return product

    def create_product(self, data: ProductCreate) -> Product:
        product = self.repository.create(data)
        logger.info(f"Created product {product.id} ({product.title}) with stock {product.stock_quantity}")
        return product

    def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        product = self.repository.update(product_id, data)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found")
        logger.info(f"Updated product {product_id}")
        return product

    def delete_product(self, product_id: str) -> None:
        if not self.repository.delete(product_id):
            raise ProductNotFound(f"Product {product_id} not found")
        logger.info(f"Deleted product {product_id}")

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def _apply(self, product_id: str, compute: Callable[[int], int], description: str) -> Product:
        try:
            result = self.repository.update_stock(product_id, compute)
        except InvariantViolation as e:
            logger.error(f"Stock invariant violated for product {product_id}: {e}")
            raise

        if result is None:
            raise ProductNotFound(f"Product {product_id} not found")

        previous, product = result
        logger.info(
            f"Stock {description} on product {product_id}: "
            f"{previous} -> {product.stock_quantity} ({product.stock_status.value})"
        )
        return product

    def update_stock(
        self,
        product_id: str,
        amount: int,
        operation: Union[StockOperation, str]
    ) -> Product:
        """
        Add, subtract or set a product's stock

        Args:
            product_id: Product ID
            amount: Units (>= 0)
            operation: add, subtract or set

        Returns:
            Product with the persisted quantity

        Raises:
            InvalidArgument: bad amount or operation (nothing is written)
            InvariantViolation: stored quantity is negative (nothing is written)
            ProductNotFound: unknown product
        """
        return self._apply(
            product_id,
            lambda current: stock_ledger.apply_stock_change(current, amount, operation),
            f"{operation.value if isinstance(operation, StockOperation) else operation} {amount}"
        )

    def quick_add_10(self, product_id: str) -> Product:
        """Restock shortcut: +10 units"""
        return self._apply(product_id, stock_ledger.quick_add_10, "quick add 10")

    def mark_out_of_stock(self, product_id: str) -> Product:
        return self._apply(product_id, stock_ledger.mark_out_of_stock, "marked out of stock")

    def get_stock_alerts(self) -> List[Product]:
        """Low and out-of-stock products for the restock alert panel"""
        return stock_ledger.select_low_stock(self.repository.find_all())

    def get_stock_overview(self) -> Dict:
        return stock_ledger.summarize_stock(self.repository.find_all())
