"""
Service layer for measurement records.

Architecture:
    API Layer (routers) → MeasurementService → MetricStore

Request payloads are validated by the schemas before they get here, so the
service never rejects a record.
"""
import logging
from datetime import datetime
from typing import List, Optional

from health_chat.core.metric_registry import get_metric
from health_chat.core.response_catalog import get_catalog
from health_chat.models import MeasurementRecord, MetricValue
from health_chat.repositories import MetricStore

logger = logging.getLogger(__name__)


class MeasurementService:
    """Records measurements and lists a user's history."""

    def __init__(self, metric_store: MetricStore):
        """
        Args:
            metric_store: Store backend, injected via
                core.dependencies.get_measurement_service().
        """
        self._store = metric_store

    def record_measurement(
        self,
        user_key: str,
        metric_type: str,
        value: MetricValue,
        unit: str,
        timestamp: Optional[datetime] = None,
        notes: Optional[str] = None
    ) -> MeasurementRecord:
        """
        Append a measurement to the user's history.

        Returns:
            MeasurementRecord: The stored record with its assigned id and timestamp.
        """
        record = self._store.append(
            user_key,
            metric_type=metric_type,
            value=value,
            unit=unit,
            timestamp=timestamp,
            notes=notes
        )
        logger.info(
            "Measurement recorded",
            extra={"user_id": user_key, "metric_type": metric_type, "record_id": record.id}
        )
        return record

    def list_measurements(self, user_key: str) -> List[MeasurementRecord]:
        """Return the user's measurements in insertion order (empty for new users)."""
        return self._store.list_all(user_key)

    @staticmethod
    def acknowledgement(metric_type: str) -> str:
        """Assistant-style confirmation for a freshly recorded metric."""
        return get_metric(metric_type).acknowledgement or get_catalog().generic_acknowledgement
