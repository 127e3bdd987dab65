"""
API endpoints for inventory alerts and the stock overview.
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import Dict

from backoffice.api.products import get_inventory_service
from backoffice.services.inventory_service import InventoryService


router = APIRouter()


@router.get("/alerts")
async def get_stock_alerts(service: InventoryService = Depends(get_inventory_service)) -> Dict:
    """
    Products that need restocking (low or out of stock)

    Returns:
        Products in catalog order with their stock status
    """
    try:
        products = service.get_stock_alerts()

        return {
            "status": "success",
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error fetching stock alerts: {str(e)}"
        )


@router.get("/overview")
async def get_stock_overview(service: InventoryService = Depends(get_inventory_service)) -> Dict:
    """
    Stock overview counters

    Returns:
        total_products, in_stock, low_stock, out_of_stock, total_units
    """
    try:
        return {
            "status": "success",
            "data": service.get_stock_overview()
        }
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error fetching stock overview: {str(e)}"
        )
