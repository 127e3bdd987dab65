"""
Product Domain Model

Represents a catalog product with its stock levels.
Stock status is derived from quantity and minimum level on every read and is
never stored.
"""
import logging
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime

from backoffice.services.stock_ledger import StockStatus, classify

logger = logging.getLogger(__name__)

DEFAULT_MIN_STOCK_LEVEL = 10
DEFAULT_MAX_STOCK_LEVEL = 100


class Product(BaseModel):
    """
    Product domain model - represents a product in the store catalog

    Fields:
        id: Opaque product identifier (primary key)
        title: Product name shown in the shop
        price: Display price as captured by the catalog editor
        unit: Unit description (e.g., "500g", "1 pack")
        image: Image URL (stored elsewhere)
        description: Short description
        full_description: Long description
        ingredients: Ingredients text
        usage_instructions: How to use

        # Inventory
        stock_quantity: Units currently on hand
        min_stock_level: At or below this the product is "low_stock"
        max_stock_level: Informational ceiling, not enforced

        # Metadata
        created_at: When product was created
        updated_at: When product was last updated
    """

    # Primary identification
    id: str = Field(..., description="Product ID")
    title: str = Field(..., description="Product title")

    # Catalog details
    price: Optional[str] = Field(None, description="Display price")
    unit: Optional[str] = Field(None, description="Unit description")
    image: Optional[str] = Field(None, description="Image URL")
    description: Optional[str] = Field(None, description="Short description")
    full_description: Optional[str] = Field(None, description="Long description")
    ingredients: Optional[str] = Field(None, description="Ingredients")
    usage_instructions: Optional[str] = Field(None, description="Usage instructions")

    # Inventory (quantity not constrained here so corrupt rows still load and get reported)
    stock_quantity: int = Field(0, description="Units on hand")
    min_stock_level: int = Field(DEFAULT_MIN_STOCK_LEVEL, description="Low stock threshold", ge=0)
    max_stock_level: int = Field(DEFAULT_MAX_STOCK_LEVEL, description="Informational stock ceiling", ge=0)

    # Metadata
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def _null_quantity_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("min_stock_level", "max_stock_level", mode="before")
    @classmethod
    def _unusable_level_uses_default(cls, value, info):
        default = DEFAULT_MIN_STOCK_LEVEL if info.field_name == "min_stock_level" else DEFAULT_MAX_STOCK_LEVEL
        if value is None:
            return default
        if isinstance(value, int) and value < 0:
            logger.warning(f"Stored {info.field_name}={value} is negative, using default {default}")
            return default
        return value

    @property
    def stock_status(self) -> StockStatus:
        """Current stock status (recomputed on every access)"""
        return classify(self.stock_quantity, self.min_stock_level)

    @property
    def is_low_stock(self) -> bool:
        return self.stock_status == StockStatus.LOW_STOCK

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock_status == StockStatus.OUT_OF_STOCK

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus stock_status
        """
        data = self.model_dump()
        data['stock_status'] = self.stock_status.value

        if data.get('created_at'):
            data['created_at'] = data['created_at'].isoformat()
        if data.get('updated_at'):
            data['updated_at'] = data['updated_at'].isoformat()

        return data


class ProductCreate(BaseModel):
    """Schema for creating a new product (title, price and unit are mandatory)"""
    title: str = Field(..., min_length=1)
    price: str = Field(..., min_length=1)
    unit: str = Field(..., min_length=1)
    image: Optional[str] = None
    description: Optional[str] = None
    full_description: Optional[str] = None
    ingredients: Optional[str] = None
    usage_instructions: Optional[str] = None
    stock_quantity: int = Field(0, ge=0)
    min_stock_level: int = Field(DEFAULT_MIN_STOCK_LEVEL, ge=0)
    max_stock_level: int = Field(DEFAULT_MAX_STOCK_LEVEL, ge=0)


class ProductUpdate(BaseModel):
    """Schema for updating an existing product (only provided fields change)"""
    title: Optional[str] = Field(None, min_length=1)
    price: Optional[str] = Field(None, min_length=1)
    unit: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    description: Optional[str] = None
    full_description: Optional[str] = None
    ingredients: Optional[str] = None
    usage_instructions: Optional[str] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    max_stock_level: Optional[int] = Field(None, ge=0)

    @field_validator("title", "price", "unit", mode="before")
    @classmethod
    def _required_fields_not_cleared(cls, value, info):
        # Omitting a field leaves it untouched; sending null would clear it
        if value is None:
            raise ValueError(f"{info.field_name} cannot be cleared")
        return value
