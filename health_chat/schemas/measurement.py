"""
Pydantic schemas for measurement API operations.
"""
from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import Field, field_validator, model_validator

from health_chat.core.metric_registry import get_metric, metric_types
from health_chat.schemas.base import CamelModel

MetricValueField = Union[int, float, str, Dict[str, Any]]


class MeasurementCreate(CamelModel):
    """Schema for recording a new measurement.

    `type` must be a registered metric. String values must match the metric's
    format: numeric metrics need a number, blood pressure needs "systolic/diastolic".
    """
    type: str = Field(..., description="Metric kind", examples=["weight"])
    value: MetricValueField = Field(
        ...,
        description="Number, composite string such as '120/80', or a small object",
        examples=[70],
    )
    unit: str = Field(..., min_length=1, max_length=50, description="Unit label, stored verbatim", examples=["kg"])
    timestamp: Optional[datetime] = Field(
        None,
        description="When the measurement was taken; defaults to the time of the request",
        examples=["2025-01-01T10:00:00Z"],
    )
    notes: Optional[str] = Field(None, max_length=1000, description="Free-text notes")
    user_id: str = Field("default", min_length=1, max_length=200, description="Owner of the record")

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        if value not in metric_types():
            raise ValueError(f"type must be one of: {', '.join(metric_types())}")
        return value

    @model_validator(mode="after")
    def validate_value_format(self) -> "MeasurementCreate":
        if isinstance(self.value, str):
            if not self.value.strip():
                raise ValueError("value must not be empty")
            metric = get_metric(self.type)
            if not metric.accepts_string_value(self.value):
                if metric.value_pattern:
                    raise ValueError(f"{metric.display_name} must be in format \"systolic/diastolic\"")
                raise ValueError("value must be a number for this metric type")
        return self


class MeasurementResponse(CamelModel):
    """A stored measurement record."""
    id: str = Field(..., description="Record identifier assigned by the service")
    type: str
    value: MetricValueField
    unit: str
    timestamp: datetime
    notes: Optional[str] = None


class MeasurementCreatedResponse(CamelModel):
    """Response for a successful write."""
    message: str = Field(..., examples=["Health metric recorded successfully"])
    data: MeasurementResponse
    acknowledgement: str = Field(..., description="Assistant-style confirmation for the metric")
