"""
Profile Repository - read-only access to customer profiles
"""
from typing import List

from backoffice.domain.order import CustomerProfile
from backoffice.core.database import get_db_connection_dict_with_retry


class ProfileRepository:
    """Customer profiles for the admin customer table"""

    def find_all(self) -> List[CustomerProfile]:
        """Every profile, newest first"""
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    id, email, name, phone, address, city, state, zip_code,
                    created_at, updated_at
                FROM profiles
                ORDER BY created_at DESC
            """)

            rows = cursor.fetchall()
            return [CustomerProfile(**{**dict(row), 'id': str(row['id'])}) for row in rows]

        finally:
            cursor.close()
            conn.close()
