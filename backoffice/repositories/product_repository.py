"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
"""
import logging
from typing import Callable, List, Optional, Tuple

from backoffice.domain.product import Product, ProductCreate, ProductUpdate
from backoffice.core.database import get_db_connection_dict_with_retry

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = """
    id, title, price, unit, image,
    description, full_description, ingredients, usage_instructions,
    stock_quantity, min_stock_level, max_stock_level,
    created_at, updated_at
"""

# Columns a ProductUpdate may touch (keys come from the schema, never from user input)
UPDATABLE_COLUMNS = frozenset(ProductUpdate.model_fields)


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Map a database row to the Product domain model"""
        return Product(
            id=str(row['id']),
            title=row['title'],
            price=row.get('price'),
            unit=row.get('unit'),
            image=row.get('image'),
            description=row.get('description'),
            full_description=row.get('full_description'),
            ingredients=row.get('ingredients'),
            usage_instructions=row.get('usage_instructions'),
            stock_quantity=row.get('stock_quantity'),
            min_stock_level=row.get('min_stock_level'),
            max_stock_level=row.get('max_stock_level'),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Product ID

        Returns:
            Product or None if not found
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_product(row)

        finally:
            cursor.close()
            conn.close()

    def find_all(self) -> List[Product]:
        """
        Find every product, newest first

        Returns:
            List of products
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                ORDER BY created_at DESC
            """)

            rows = cursor.fetchall()
            return [self._map_row_to_product(row) for row in rows]

        finally:
            cursor.close()
            conn.close()

    def create(self, data: ProductCreate) -> Product:
        """
        Insert a new product

        Args:
            data: Validated product fields (stock defaults already applied)

        Returns:
            The stored product
        """
        fields = data.model_dump()
        columns = list(fields)
        placeholders = ", ".join(["%s"] * len(columns))

        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO products ({", ".join(columns)}, created_at, updated_at)
                VALUES ({placeholders}, NOW(), NOW())
                RETURNING {PRODUCT_COLUMNS}
            """, [fields[column] for column in columns])

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_product(row)

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def update(self, product_id: str, data: ProductUpdate) -> Optional[Product]:
        """
        Update the fields present in data

        Args:
            product_id: Product ID
            data: Partial update; unset fields are left as they are

        Returns:
            Updated product or None if not found
        """
        fields = {
            column: value
            for column, value in data.model_dump(exclude_unset=True).items()
            if column in UPDATABLE_COLUMNS
        }
        if not fields:
            return self.find_by_id(product_id)

        assignments = ", ".join(f"{column} = %s" for column in fields)

        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE products
                SET {assignments}, updated_at = NOW()
                WHERE id = %s
                RETURNING {PRODUCT_COLUMNS}
            """, list(fields.values()) + [product_id])

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_product(row) if row else None

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def delete(self, product_id: str) -> bool:
        """
        Delete a product

        Returns:
            True if a row was deleted
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM products WHERE id = %s", (product_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def update_stock(
        self,
        product_id: str,
        compute: Callable[[int], int]
    ) -> Optional[Tuple[int, Product]]:
        """
        Locked read-modify-write of a product's stock quantity

        The current quantity is read with SELECT ... FOR UPDATE, so concurrent
        stock changes on the same product are serialized by the row lock and
        no increment is lost. compute runs inside the transaction; if it
        raises, the transaction is rolled back and the error propagates.

        Args:
            product_id: Product ID
            compute: Maps the current quantity to the new quantity

        Returns:
            (previous quantity, updated product) or None if not found
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT stock_quantity
                FROM products
                WHERE id = %s
                FOR UPDATE
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                conn.rollback()
                return None

            previous = row['stock_quantity'] if row['stock_quantity'] is not None else 0
            new_quantity = compute(previous)

            cursor.execute(f"""
                UPDATE products
                SET stock_quantity = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING {PRODUCT_COLUMNS}
            """, (new_quantity, product_id))

            updated = cursor.fetchone()
            conn.commit()

            logger.debug(f"Product {product_id} stock written: {previous} -> {new_quantity}")
            return previous, self._map_row_to_product(updated)

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
