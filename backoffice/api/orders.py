"""
Orders API Endpoints
Order table, statistics, sales trend and admin visibility
"""
from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.core.exceptions import OrderNotFound
from backoffice.domain.order import OrderVisibilityUpdate
from backoffice.services.order_aggregator import ALL_STATUSES, OrderSort
from backoffice.services.order_service import OrderService

router = APIRouter()


def get_order_service() -> OrderService:
    return OrderService()


@router.get("/")
async def get_orders(
    status: str = Query(ALL_STATUSES, description="Exact order status, or 'all'"),
    search: str = Query("", description="Search by order number, customer name, email or phone"),
    sort_by: str = Query(OrderSort.DATE_DESC.value, description="date_desc, date_asc, amount_desc or amount_asc"),
    service: OrderService = Depends(get_order_service)
):
    """
    Get orders filtered and sorted for the order table

    The summary is computed over all orders, not just the filtered page.
    """
    try:
        result = service.list_orders(status_filter=status, search_term=search, sort_by=sort_by)
        orders = result["orders"]

        return {
            "status": "success",
            "count": len(orders),
            "data": [order.to_dict() for order in orders],
            "summary": result["summary"].to_dict()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")


@router.get("/stats")
async def get_order_stats(service: OrderService = Depends(get_order_service)):
    """
    Get order statistics

    Returns:
    - Visible order count
    - Total revenue and average order value
    - Orders by status
    """
    try:
        return {
            "status": "success",
            "data": service.get_stats().to_dict()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching stats: {str(e)}")


@router.get("/sales-trend")
async def get_sales_trend(service: OrderService = Depends(get_order_service)):
    """Revenue per month for the sales chart"""
    try:
        return {
            "status": "success",
            "data": service.get_sales_trend()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching sales trend: {str(e)}")


@router.patch("/{order_id}/visibility")
async def set_order_visibility(
    order_id: str,
    payload: OrderVisibilityUpdate,
    service: OrderService = Depends(get_order_service)
):
    """Hide an order from (or return it to) the admin statistics"""
    try:
        service.set_visibility(order_id, payload.admin_visible)
        return {"status": "success", "id": order_id, "admin_visible": payload.admin_visible}

    except OrderNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating order: {str(e)}")
