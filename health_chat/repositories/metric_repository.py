"""
Metric stores: per-user, append-only, insertion-ordered measurement history.

Two interchangeable backends implement MetricStore:
- InMemoryMetricStore: transient dict of lists guarded by a single lock
- SqliteMetricStore: durable table where the autoincrement seq is the order

Records are never updated or deleted. Unknown users have an empty history.
"""
import json
import logging
import sqlite3
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from health_chat.core.datetime_utils import to_db_string, to_utc, utc_now
from health_chat.core.exceptions import StorageError
from health_chat.models import MeasurementRecord, MetricValue
from health_chat.repositories.base import Database

logger = logging.getLogger(__name__)


class MetricStore(ABC):
    """Contract shared by all measurement store backends."""

    @abstractmethod
    def append(
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

        Assigns a fresh id and stamps the current UTC time when no timestamp
        is given. Supplied timestamps are normalized to UTC.

        Returns:
            MeasurementRecord: The stored record, including its new id.
        """

    @abstractmethod
    def list_all(self, user_key: str) -> List[MeasurementRecord]:
        """Return the user's full history in insertion order."""

    def ping(self) -> None:
        """Raise StorageError if the backend cannot be reached."""

    def _build_record(
        self,
        metric_type: str,
        value: MetricValue,
        unit: str,
        timestamp: Optional[datetime],
        notes: Optional[str]
    ) -> MeasurementRecord:
        return MeasurementRecord(
            id=str(uuid.uuid4()),
            type=metric_type,
            value=value,
            unit=unit,
            timestamp=to_utc(timestamp) if timestamp is not None else utc_now(),
            notes=notes,
        )


class InMemoryMetricStore(MetricStore):
    """Process-lifetime store; contents are lost on restart."""

    def __init__(self):
        self._records: Dict[str, List[MeasurementRecord]] = {}
        self._lock = threading.Lock()

    def append(self, user_key, metric_type, value, unit, timestamp=None, notes=None):
        record = self._build_record(metric_type, value, unit, timestamp, notes)
        with self._lock:
            self._records.setdefault(user_key, []).append(record)
        return record

    def list_all(self, user_key):
        with self._lock:
            return list(self._records.get(user_key, ()))


class SqliteMetricStore(MetricStore):
    """
    Durable store backed by the `measurements` table.

    It should be instantiated via core.dependencies.get_metric_store().
    """

    def __init__(self, db: Database):
        self._db = db

    def ping(self):
        self._db.ping()

    def append(self, user_key, metric_type, value, unit, timestamp=None, notes=None):
        record = self._build_record(metric_type, value, unit, timestamp, notes)
        conn = self._db.get_connection()
        try:
            with conn:
                conn.execute("""
                    INSERT INTO measurements
                    (record_id, user_key, metric_type, value, unit, timestamp, notes)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    record.id,
                    user_key,
                    record.type,
                    json.dumps(record.value),
                    record.unit,
                    to_db_string(record.timestamp),
                    record.notes
                ))
        except sqlite3.Error as e:
            logger.error(f"Error saving measurement: {e}", exc_info=True)
            raise StorageError(operation="append_measurement") from e
        finally:
            conn.close()
        return record

    def list_all(self, user_key):
        conn = self._db.get_connection()
        try:
            rows = conn.execute("""
                SELECT record_id, metric_type, value, unit, timestamp, notes
                FROM measurements
                WHERE user_key = ?
                ORDER BY seq ASC
            """, (user_key,)).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error reading measurements: {e}", exc_info=True)
            raise StorageError(operation="list_measurements") from e
        finally:
            conn.close()
        return [MeasurementRecord.from_row(row) for row in rows]
