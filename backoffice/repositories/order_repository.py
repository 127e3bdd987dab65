"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models
with the linked customer profile and line items attached.
"""
from typing import Dict, List

from backoffice.domain.order import Order, OrderItem, CustomerProfile
from backoffice.core.database import get_db_connection_dict_with_retry

ORDER_COLUMNS = """
    id, order_number, user_id, status, total, payment_method, admin_visible,
    customer_name, customer_email, customer_phone,
    delivery_address, delivery_city, delivery_state, delivery_zip_code,
    cancelled_at, cancellation_reason, cancelled_by,
    created_at, updated_at
"""


class OrderRepository:
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    """

    @staticmethod
    def _map_row_to_order(
        row: dict,
        profiles: Dict[str, CustomerProfile],
        items: Dict[str, List[OrderItem]]
    ) -> Order:
        order_dict = dict(row)
        order_dict['id'] = str(row['id'])
        if row.get('user_id') is not None:
            order_dict['user_id'] = str(row['user_id'])
        order_dict['profile'] = profiles.get(order_dict.get('user_id'))
        order_dict['items'] = items.get(order_dict['id'], [])
        return Order(**order_dict)

    def find_all(self) -> List[Order]:
        """
        Find every order, newest first, with profile and items

        Profiles and items are loaded with one query each for the whole page
        (no N+1).

        Returns:
            List of orders
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                ORDER BY created_at DESC
            """)
            order_rows = cursor.fetchall()

            if not order_rows:
                return []

            # Profiles for every distinct customer in ONE QUERY
            user_ids = list({str(row['user_id']) for row in order_rows if row.get('user_id') is not None})
            profiles: Dict[str, CustomerProfile] = {}
            if user_ids:
                cursor.execute("""
                    SELECT id, name, email
                    FROM profiles
                    WHERE id::text = ANY(%s)
                """, (user_ids,))
                for profile_row in cursor.fetchall():
                    profile = CustomerProfile(
                        id=str(profile_row['id']),
                        name=profile_row.get('name'),
                        email=profile_row.get('email')
                    )
                    profiles[profile.id] = profile

            # Items for every order in ONE QUERY
            order_ids = [str(row['id']) for row in order_rows]
            cursor.execute("""
                SELECT
                    oi.order_id, oi.id, oi.product_id, oi.quantity, oi.price,
                    p.title as product_title,
                    p.image as product_image
                FROM order_items oi
                LEFT JOIN products p ON oi.product_id = p.id
                WHERE oi.order_id::text = ANY(%s)
                ORDER BY oi.order_id, oi.id
            """, (order_ids,))

            items_by_order: Dict[str, List[OrderItem]] = {}
            for item in cursor.fetchall():
                order_id = str(item['order_id'])
                items_by_order.setdefault(order_id, []).append(OrderItem(
                    id=str(item['id']),
                    product_id=str(item['product_id']) if item.get('product_id') is not None else None,
                    quantity=item['quantity'],
                    price=item.get('price'),
                    product_title=item.get('product_title'),
                    product_image=item.get('product_image')
                ))

            return [self._map_row_to_order(row, profiles, items_by_order) for row in order_rows]

        finally:
            cursor.close()
            conn.close()

    def set_admin_visible(self, order_id: str, visible: bool) -> bool:
        """
        Show or hide an order in admin statistics

        Returns:
            True if the order exists
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE orders
                SET admin_visible = %s, updated_at = NOW()
                WHERE id = %s
            """, (visible, order_id))
            updated = cursor.rowcount > 0
            conn.commit()
            return updated

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
