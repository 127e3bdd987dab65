"""
Products API Endpoints
Catalog management and per-product stock changes
"""
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from backoffice.core.exceptions import InvalidArgument, InvariantViolation, ProductNotFound
from backoffice.domain.product import ProductCreate, ProductUpdate
from backoffice.services.inventory_service import InventoryService

logger = logging.getLogger(__name__)

router = APIRouter()


# Request models
class StockUpdate(BaseModel):
    amount: int = 0
    operation: Literal["add", "subtract", "set", "add10"]


def get_inventory_service() -> InventoryService:
    return InventoryService()


@router.get("/")
async def get_products(
    search: Optional[str] = Query(None, description="Search by title, unit or description"),
    service: InventoryService = Depends(get_inventory_service)
):
    """
    Get all products with their derived stock status
    """
    try:
        products = service.list_products(search=search)

        return {
            "status": "success",
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.post("/", status_code=201)
async def create_product(
    payload: ProductCreate,
    service: InventoryService = Depends(get_inventory_service)
):
    """Add a product with its initial stock and thresholds"""
    try:
        product = service.create_product(payload)
        return {"status": "success", "data": product.to_dict()}

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error creating product: {str(e)}")


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: InventoryService = Depends(get_inventory_service)
):
    """Edit catalog fields and stock levels"""
    try:
        product = service.update_product(product_id, payload)
        return {"status": "success", "data": product.to_dict()}

    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating product: {str(e)}")


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    service: InventoryService = Depends(get_inventory_service)
):
    try:
        service.delete_product(product_id)
        return {"status": "success", "id": product_id}

    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error deleting product: {str(e)}")


@router.post("/{product_id}/stock")
async def update_stock(
    product_id: str,
    payload: StockUpdate,
    service: InventoryService = Depends(get_inventory_service)
):
    """
    Change a product's stock

    Operations:
    - add: stock + amount
    - subtract: stock - amount, never below 0
    - set: stock = amount
    - add10: restock shortcut, amount is ignored
    """
    try:
        if payload.operation == "add10":
            product = service.quick_add_10(product_id)
        else:
            product = service.update_stock(product_id, payload.amount, payload.operation)

        return {"status": "success", "data": product.to_dict()}

    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvariantViolation as e:
        raise HTTPException(status_code=500, detail=f"Stock data inconsistent, contact an operator: {str(e)}")
    except Exception as e:
        logger.exception(f"Stock update failed for product {product_id}")
        raise HTTPException(status_code=500, detail=f"Error updating stock: {str(e)}")


@router.post("/{product_id}/stock/out-of-stock")
async def mark_out_of_stock(
    product_id: str,
    service: InventoryService = Depends(get_inventory_service)
):
    """Set the product's stock to 0"""
    try:
        product = service.mark_out_of_stock(product_id)
        return {"status": "success", "data": product.to_dict()}

    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvariantViolation as e:
        raise HTTPException(status_code=500, detail=f"Stock data inconsistent, contact an operator: {str(e)}")
    except Exception as e:
        logger.exception(f"Marking product {product_id} out of stock failed")
        raise HTTPException(status_code=500, detail=f"Error updating stock: {str(e)}")
