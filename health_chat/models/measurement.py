"""
Domain model for measurement records.
"""
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from health_chat.core.datetime_utils import from_db_string

# Numbers, composite strings such as "120/80", or a small structured object.
MetricValue = Union[int, float, str, Dict[str, Any]]


@dataclass(frozen=True)
class MeasurementRecord:
    """One logged health value. Never mutated after the store creates it."""

    id: str
    type: str
    value: MetricValue
    unit: str
    timestamp: datetime
    notes: Optional[str] = None

    @classmethod
    def from_row(cls, row: tuple) -> 'MeasurementRecord':
        """
        Create a record from a database row.

        Args:
            row: Tuple of (record_id, metric_type, value_json, unit, timestamp, notes).
        """
        return cls(
            id=row[0],
            type=row[1],
            value=json.loads(row[2]),
            unit=row[3],
            timestamp=from_db_string(row[4]),
            notes=row[5],
        )
