import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from tortoise import timezone
from app.core.errors import ServiceValidationError
from app.schemas.response import SuccessResponse
from app.schemas.report import (
    DaySummaryResponse,
    HourlySalesResponse,
    IngredientUsageResponse,
    OrderSummaryResponse,
)
from app.services.report_service import inventory_usage, orders_in_range, x_report, z_report

log = logging.getLogger("uvicorn")

router = APIRouter()


@router.get("/orders", response_model=SuccessResponse)
async def orders_report_endpoint(start: datetime = Query(...), end: datetime = Query(...)):
    """Orders placed between `start` and `end` (inclusive)."""
    try:
        orders = await orders_in_range(start, end)
        return SuccessResponse(
            data=[OrderSummaryResponse.model_validate(o).model_dump(mode="json") for o in orders]
        )
    except ServiceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error fetching order range: {e}")
        raise HTTPException(status_code=500, detail="Failed to get Order Date Range")


@router.get("/inventory-usage", response_model=SuccessResponse)
async def inventory_usage_endpoint(start: datetime = Query(...), end: datetime = Query(...)):
    """Ingredients consumed by the orders placed in the range."""
    try:
        usage = await inventory_usage(start, end)
        return SuccessResponse(
            data=[IngredientUsageResponse(**asdict(u)).model_dump(mode="json") for u in usage]
        )
    except ServiceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error fetching inventory used: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch inventory usage report.")


@router.get("/x", response_model=SuccessResponse)
async def x_report_endpoint(day: Optional[date] = None):
    """Hourly sales for `day` (default today)."""
    try:
        hours = await x_report(day or timezone.now().date())
        return SuccessResponse(
            data=[HourlySalesResponse(**asdict(h)).model_dump(mode="json") for h in hours]
        )
    except Exception as e:
        log.error(f"Error building X report: {e}")
        raise HTTPException(status_code=500, detail="Failed to get X Report")


@router.get("/z", response_model=SuccessResponse)
async def z_report_endpoint(day: Optional[date] = None):
    """Closing totals for `day` (default today). Reading it resets the daily totals."""
    try:
        rows = await z_report(day or timezone.now().date())
        return SuccessResponse(
            data=[DaySummaryResponse(**asdict(r)).model_dump(mode="json") for r in rows]
        )
    except Exception as e:
        log.error(f"Error building Z report: {e}")
        raise HTTPException(status_code=500, detail="Failed to get or truncate Z Report")
