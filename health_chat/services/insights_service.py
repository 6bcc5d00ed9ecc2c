"""
Service layer for health insights.
"""
import logging
from typing import Optional

from health_chat.repositories import MetricStore
from health_chat.services.insights_engine import InsightsReport, compute_insights

logger = logging.getLogger(__name__)


class InsightsService:
    """Computes trend reports from a user's measurement history."""

    def __init__(self, metric_store: MetricStore):
        self._store = metric_store

    def get_insights(self, user_key: str) -> Optional[InsightsReport]:
        """
        Build the insights report for a user.

        Returns:
            InsightsReport, or None when the user has no measurements
            (the engine is not run in that case).
        """
        records = self._store.list_all(user_key)
        if not records:
            logger.info("No measurements for insights", extra={"user_id": user_key})
            return None
        return compute_insights(records)
