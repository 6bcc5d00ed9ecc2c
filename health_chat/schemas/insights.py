"""
Pydantic schemas for the insights API.
"""
from typing import Dict, List, Literal, Optional

from pydantic import Field

from health_chat.schemas.base import CamelModel
from health_chat.services.insights_engine import InsightsReport


class TrendSummaryResponse(CamelModel):
    delta: float = Field(..., description="Last value minus first value, by timestamp")
    percent_delta: Optional[float] = Field(
        ...,
        description="Change relative to the first value, one decimal; null when the first value is 0",
    )
    direction: Literal["increase", "decrease", "stable"]
    sample_count: int


class InsightsResponse(CamelModel):
    total_records: int
    metrics_tracked: List[str]
    trends: Dict[str, TrendSummaryResponse]
    recommendations: List[str]

    @classmethod
    def from_report(cls, report: InsightsReport) -> "InsightsResponse":
        return cls(
            total_records=report.total_records,
            metrics_tracked=report.metrics_tracked,
            trends={
                metric_type: TrendSummaryResponse(
                    delta=trend.delta,
                    percent_delta=trend.percent_delta,
                    direction=trend.direction,
                    sample_count=trend.sample_count,
                )
                for metric_type, trend in report.trends.items()
            },
            recommendations=report.recommendations,
        )


class MessageResponse(CamelModel):
    """Plain message body, used for the empty insights state and the banner."""
    message: str
