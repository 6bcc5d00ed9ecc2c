"""
Pydantic schemas for metric metadata.
"""
from typing import List, Optional

from health_chat.schemas.base import CamelModel


class MetricDefinitionResponse(CamelModel):
    canonical_name: str
    display_name: str
    unit: str
    numeric: bool
    value_pattern: Optional[str] = None
    keywords: List[str]


class MetricsListResponse(CamelModel):
    metrics: List[MetricDefinitionResponse]
