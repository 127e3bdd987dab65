"""
Customer profiles API (read-only)
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.api.orders import get_order_service
from backoffice.services.order_service import OrderService

router = APIRouter()


@router.get("/")
async def get_profiles(
    search: Optional[str] = Query(None, description="Search by name, email or id"),
    service: OrderService = Depends(get_order_service)
):
    try:
        profiles = service.list_profiles(search=search)

        return {
            "status": "success",
            "count": len(profiles),
            "data": [profile.model_dump(mode="json") for profile in profiles]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching profiles: {str(e)}")
