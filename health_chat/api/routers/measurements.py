"""
Measurements router - record and list a user's health measurements.

Architecture:
    HTTP Request → Router (this file) → MeasurementService → MetricStore

Payloads are validated by MeasurementCreate before the service is called;
invalid ones are answered with 422 by FastAPI.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Path

from health_chat.core.dependencies import get_measurement_service
from health_chat.schemas import (
    MeasurementCreate,
    MeasurementCreatedResponse,
    MeasurementResponse,
)
from health_chat.services import MeasurementService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/health",
    tags=["Measurements"],
)

DEFAULT_USER = "default"


@router.post(
    "/data",
    response_model=MeasurementCreatedResponse,
    status_code=201,
    summary="Record a measurement",
    description="Append a measurement to the user's history. The id is assigned by the "
                "service and the timestamp defaults to the time of the request."
)
async def create_measurement(
    measurement: MeasurementCreate,
    measurement_service: MeasurementService = Depends(get_measurement_service)
):
    """
    Record a measurement.

    - **type**: One of the registered metric kinds (see /api/health/metrics)
    - **value**: Number, composite string such as "120/80", or an object
    - **unit**: Unit label, stored as given
    - **timestamp**: Optional; back-dated entries are accepted
    - **notes**: Optional free text
    - **userId**: Optional, defaults to "default"
    """
    record = measurement_service.record_measurement(
        user_key=measurement.user_id,
        metric_type=measurement.type,
        value=measurement.value,
        unit=measurement.unit,
        timestamp=measurement.timestamp,
        notes=measurement.notes
    )
    return MeasurementCreatedResponse(
        message="Health metric recorded successfully",
        data=MeasurementResponse.model_validate(record),
        acknowledgement=measurement_service.acknowledgement(record.type),
    )


@router.get(
    "/data",
    response_model=List[MeasurementResponse],
    summary="List the default user's measurements"
)
async def list_default_measurements(
    measurement_service: MeasurementService = Depends(get_measurement_service)
):
    return _list(DEFAULT_USER, measurement_service)


@router.get(
    "/data/{user_id}",
    response_model=List[MeasurementResponse],
    summary="List a user's measurements",
    description="Returns every measurement of the user in the order they were recorded. "
                "Unknown users get an empty list."
)
async def list_measurements(
    user_id: str = Path(..., min_length=1, max_length=200),
    measurement_service: MeasurementService = Depends(get_measurement_service)
):
    return _list(user_id, measurement_service)


def _list(user_id: str, measurement_service: MeasurementService) -> List[MeasurementResponse]:
    return [
        MeasurementResponse.model_validate(record)
        for record in measurement_service.list_measurements(user_id)
    ]
