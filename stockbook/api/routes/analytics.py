"""Dashboard analytics endpoints."""

from fastapi import APIRouter, Depends, Query

from stockbook.api.dependencies import get_dashboard_use_case
from stockbook.application.dto.responses import DashboardResponse, TrendResponse
from stockbook.application.use_cases import GetDashboardUseCase

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    weeks: int | None = Query(default=None, gt=0, le=52),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> DashboardResponse:
    """Inventory summary, weekly trend and product lists."""
    result = await use_case.execute(weeks=weeks)
    return use_case.to_response(result)


@router.get("/trend", response_model=TrendResponse)
async def trend(
    weeks: int | None = Query(default=None, gt=0, le=52),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> TrendResponse:
    """Weekly revenue, profit and units, by product creation week."""
    return TrendResponse.from_entity(await use_case.get_trend(weeks=weeks))
