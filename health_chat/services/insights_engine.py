"""
Trend statistics and recommendations over a user's measurements.

For every metric type with at least two records the engine compares the
earliest and the latest value by timestamp (not by insertion order):

    delta         = last - first
    percent_delta = delta / first * 100, one decimal, halves away from zero
    direction     = "increase" | "decrease" | "stable"

Types whose first or last value is not a single number (e.g. "120/80")
get no trend entry. A zero first value gives percent_delta = None while
delta and direction are still reported.

The engine is pure: it never touches the stores and is only called with a
non-empty record list (the service answers the empty case itself).
"""
import logging
import math
import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence

from health_chat.core.response_catalog import ResponseCatalog, get_catalog
from health_chat.models import MeasurementRecord, MetricValue

logger = logging.getLogger(__name__)

MIN_TREND_SAMPLES = 2
MIN_METRIC_TYPES = 3
MIN_RECORDS = 7

_NUMERIC_PREFIX = re.compile(r'^[+-]?(\d+(?:\.\d*)?|\.\d+)')


@dataclass(frozen=True)
class TrendSummary:
    delta: float
    percent_delta: Optional[float]
    direction: str
    sample_count: int


@dataclass
class InsightsReport:
    total_records: int
    metrics_tracked: List[str]
    trends: Dict[str, TrendSummary] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)


def parse_numeric(value: MetricValue) -> Optional[float]:
    """
    Parse a measurement value as a single number.

    Returns None for:
    - booleans and structured values
    - empty strings
    - composite values like "120/80"
    - non-numeric strings, NaN and infinities

    Strings with a trailing label ("70 kg") parse to their leading number.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # ints beyond float range
            return None
        return number if math.isfinite(number) else None

    if not isinstance(value, str):
        return None

    cleaned = value.strip()
    if not cleaned or '/' in cleaned:
        return None

    try:
        number = float(cleaned)
        return number if math.isfinite(number) else None
    except ValueError:
        pass

    match = _NUMERIC_PREFIX.match(cleaned)
    if match:
        number = float(match.group(0))
        return number if math.isfinite(number) else None
    return None


def round_half_away(number: float, places: int = 1) -> float:
    """
    Round with exact halves going away from zero: 0.25 -> 0.3, -0.25 -> -0.3.

    Works on the exact binary value of `number`, so 1.005 (stored as
    1.00499...) still rounds down at two places.
    """
    if abs(number) >= 2 ** 52:
        # No fractional part left at this magnitude
        return number
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(number).quantize(exponent, rounding=ROUND_HALF_UP))


def _percent_change(delta: float, first: float) -> Optional[float]:
    if first == 0:
        return None
    percent = delta / first * 100
    return round_half_away(percent) if math.isfinite(percent) else None


def _direction(delta: float) -> str:
    if delta > 0:
        return "increase"
    if delta < 0:
        return "decrease"
    return "stable"


def compute_trend(records: Sequence[MeasurementRecord]) -> Optional[TrendSummary]:
    """
    Compare the earliest and latest values of one metric type.

    Returns:
        TrendSummary, or None when there are fewer than two records or
        either endpoint is not numeric.
    """
    if len(records) < MIN_TREND_SAMPLES:
        return None

    ordered = sorted(records, key=lambda r: r.timestamp)
    first = parse_numeric(ordered[0].value)
    last = parse_numeric(ordered[-1].value)
    if first is None or last is None:
        logger.debug(
            "Skipping trend for non-numeric values",
            extra={"metric_type": ordered[0].type}
        )
        return None

    delta = last - first
    if not math.isfinite(delta):
        logger.debug(
            "Skipping trend for out-of-range values",
            extra={"metric_type": ordered[0].type}
        )
        return None

    return TrendSummary(
        delta=delta,
        percent_delta=_percent_change(delta, first),
        direction=_direction(delta),
        sample_count=len(ordered),
    )


def compute_insights(
    records: Sequence[MeasurementRecord],
    catalog: Optional[ResponseCatalog] = None
) -> InsightsReport:
    """
    Build the insights report for a user's full history.

    Args:
        records: All of the user's measurements, in any order
        catalog: Recommendation texts; defaults to the bundled catalog
    """
    catalog = catalog or get_catalog()

    groups: Dict[str, List[MeasurementRecord]] = {}
    for record in records:
        groups.setdefault(record.type, []).append(record)

    report = InsightsReport(
        total_records=len(records),
        metrics_tracked=list(groups),
    )

    for metric_type, group in groups.items():
        trend = compute_trend(group)
        if trend is not None:
            report.trends[metric_type] = trend

    if len(report.metrics_tracked) < MIN_METRIC_TYPES:
        report.recommendations.append(catalog.track_more_metrics)
    if report.total_records < MIN_RECORDS:
        report.recommendations.append(catalog.log_more_often)
    report.recommendations.append(catalog.encouragement)

    return report
