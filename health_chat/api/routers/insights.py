"""
Insights router - per-metric trends and recommendations.

Users without measurements get a plain message instead of a report.
"""
import logging
from typing import Union

from fastapi import APIRouter, Depends, Path

from health_chat.core.dependencies import get_insights_service
from health_chat.core.response_catalog import get_catalog
from health_chat.schemas import InsightsResponse, MessageResponse
from health_chat.services import InsightsService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/health",
    tags=["Insights"],
)


@router.get(
    "/insights",
    response_model=Union[InsightsResponse, MessageResponse],
    summary="Insights for the default user"
)
async def default_insights(
    insights_service: InsightsService = Depends(get_insights_service)
):
    return _insights("default", insights_service)


@router.get(
    "/insights/{user_id}",
    response_model=Union[InsightsResponse, MessageResponse],
    summary="Insights for a user",
    description="Trend per metric type (first vs last value by timestamp) and "
                "recommendations. Returns {\"message\": ...} when the user has no data."
)
async def user_insights(
    user_id: str = Path(..., min_length=1, max_length=200),
    insights_service: InsightsService = Depends(get_insights_service)
):
    return _insights(user_id, insights_service)


def _insights(user_id: str, insights_service: InsightsService) -> Union[InsightsResponse, MessageResponse]:
    report = insights_service.get_insights(user_id)
    if report is None:
        return MessageResponse(message=get_catalog().insights_no_data)
    return InsightsResponse.from_report(report)
