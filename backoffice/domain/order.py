"""
Order Domain Models

Orders as the admin sees them: the order row, the customer profile linked
through user_id (if any) and the line items.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict
from datetime import datetime
from decimal import Decimal


class CustomerProfile(BaseModel):
    """
    Customer profile (lightweight, read-only)

    Identity management lives elsewhere; the admin only reads these.
    """

    id: str = Field(..., description="Profile ID (same as the user id)")
    email: Optional[str] = Field(None, description="Profile email")
    name: Optional[str] = Field(None, description="Profile name")
    phone: Optional[str] = Field(None, description="Profile phone")
    address: Optional[str] = Field(None, description="Street address")
    city: Optional[str] = Field(None, description="City")
    state: Optional[str] = Field(None, description="State")
    zip_code: Optional[str] = Field(None, description="ZIP code")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class OrderItem(BaseModel):
    """Order line item with the product title captured from the catalog"""

    id: str = Field(..., description="Order item ID")
    quantity: int = Field(..., description="Quantity ordered", ge=0)
    price: Optional[Decimal] = Field(None, description="Unit price at order time", ge=0)
    product_id: Optional[str] = Field(None, description="Product ID")
    product_title: Optional[str] = Field(None, description="Product title (from JOIN)")
    product_image: Optional[str] = Field(None, description="Product image URL (from JOIN)")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        data = self.model_dump()
        if data.get('price') is not None:
            data['price'] = float(data['price'])
        return data


class Order(BaseModel):
    """
    Order domain model - represents a customer order

    Fields:
        id: Order ID (primary key)
        order_number: Human-readable order number
        user_id: Customer user ID (links to a profile)
        status: Order status (pending, completed, cancelled, ...; open set)
        total: Order total; missing totals count as 0 everywhere
        admin_visible: False hides the order from admin statistics

        # Customer snapshot captured at checkout
        customer_name, customer_email, customer_phone

        # Delivery
        delivery_address, delivery_city, delivery_state, delivery_zip_code

        # Cancellation
        cancelled_at, cancellation_reason, cancelled_by

        # Related data (optional, from JOINs)
        profile: Linked customer profile
        items: Order items
    """

    # Primary identification
    id: str = Field(..., description="Order ID")
    order_number: Optional[str] = Field(None, description="Order number")
    user_id: Optional[str] = Field(None, description="Customer user ID")

    # Status and amounts
    status: str = Field(..., description="Order status")
    total: Optional[Decimal] = Field(None, description="Total order amount", ge=0)
    payment_method: Optional[str] = Field(None, description="Payment method")
    admin_visible: Optional[bool] = Field(True, description="Counted in admin statistics")

    # Customer snapshot
    customer_name: Optional[str] = Field(None, description="Customer name at checkout")
    customer_email: Optional[str] = Field(None, description="Customer email at checkout")
    customer_phone: Optional[str] = Field(None, description="Customer phone at checkout")

    # Delivery
    delivery_address: Optional[str] = Field(None, description="Delivery address")
    delivery_city: Optional[str] = Field(None, description="Delivery city")
    delivery_state: Optional[str] = Field(None, description="Delivery state")
    delivery_zip_code: Optional[str] = Field(None, description="Delivery ZIP code")

    # Cancellation
    cancelled_at: Optional[datetime] = Field(None, description="Cancellation timestamp")
    cancellation_reason: Optional[str] = Field(None, description="Cancellation reason")
    cancelled_by: Optional[str] = Field(None, description="Who cancelled the order")

    # Dates
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    # Related data (from JOINs - optional)
    profile: Optional[CustomerProfile] = Field(None, description="Linked customer profile")
    items: List[OrderItem] = Field(default_factory=list, description="Order items")

    model_config = ConfigDict(from_attributes=True)

    # Computed properties
    @property
    def amount(self) -> Decimal:
        """Total as used in aggregation (missing counts as 0)"""
        return self.total if self.total is not None else Decimal('0')

    @property
    def is_visible(self) -> bool:
        """Only an explicit False hides an order"""
        return self.admin_visible is not False

    @property
    def display_name(self) -> Optional[str]:
        """Profile name when linked, otherwise the checkout snapshot"""
        if self.profile and self.profile.name:
            return self.profile.name
        return self.customer_name

    @property
    def display_email(self) -> Optional[str]:
        if self.profile and self.profile.email:
            return self.profile.email
        return self.customer_email

    @property
    def item_count(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Decimals become floats and datetimes ISO strings for JSON responses.
        """
        data = self.model_dump(exclude={'items'})

        data['total'] = float(self.amount)
        data['display_name'] = self.display_name
        data['display_email'] = self.display_email
        data['item_count'] = self.item_count

        for field in ['created_at', 'updated_at', 'cancelled_at']:
            if data.get(field):
                data[field] = data[field].isoformat()
        if data.get('profile'):
            for field in ['created_at', 'updated_at']:
                if data['profile'].get(field):
                    data['profile'][field] = data['profile'][field].isoformat()

        data['items'] = [item.to_dict() for item in self.items]

        return data


class OrderSummary(BaseModel):
    """Aggregate statistics over visible orders"""

    count: int = 0
    total_revenue: Decimal = Decimal('0')
    average_order_value: Decimal = Decimal('0')
    status_counts: Dict[str, int] = Field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'count': self.count,
            'total_revenue': float(self.total_revenue),
            'average_order_value': float(self.average_order_value),
            'status_counts': dict(self.status_counts),
        }


class OrderVisibilityUpdate(BaseModel):
    """Schema for hiding/showing an order in admin statistics"""
    admin_visible: bool
