"""
Meta router - metric definitions from metrics.yaml.

Lets clients build their metric pickers (labels, default units, value
formats) without hardcoding them.
"""
from fastapi import APIRouter

from health_chat.core.metric_registry import MetricDefinition, list_metrics
from health_chat.schemas import MetricDefinitionResponse, MetricsListResponse

router = APIRouter(
    prefix="/api/health",
    tags=["Metadata"],
)


def _metric_to_response(metric: MetricDefinition) -> MetricDefinitionResponse:
    return MetricDefinitionResponse(
        canonical_name=metric.canonical_name,
        display_name=metric.display_name,
        unit=metric.unit,
        numeric=metric.numeric,
        value_pattern=metric.value_pattern,
        keywords=list(metric.keywords),
    )


@router.get(
    "/metrics",
    response_model=MetricsListResponse,
    summary="List metric definitions",
    description="All accepted metric kinds in registry order."
)
async def get_metrics() -> MetricsListResponse:
    return MetricsListResponse(
        metrics=[_metric_to_response(m) for m in list_metrics().values()]
    )
