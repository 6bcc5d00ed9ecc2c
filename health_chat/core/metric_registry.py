"""
Central metric registry - single source of truth for metric kinds.

This module provides:
- YAML-based loading and validation of metrics.yaml
- MetricDefinition dataclass holding per-metric display data and canned texts
- Lookup by canonical name and ordered listing

Adding a metric kind is a data change: append an entry to metrics.yaml.
The file order is the order in which the chat matcher tests metric keywords.

Usage:
    from health_chat.core.metric_registry import get_metric, list_metrics, humanize

    metric = get_metric("blood_pressure")
    metric.keywords            # ("blood pressure",)
    humanize("sleep_hours")    # "sleep hours"
"""
import logging
import math
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from health_chat.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricDefinition:
    """
    Immutable definition for a metric kind.

    Attributes:
        canonical_name: Stored `type` value (e.g. "blood_pressure")
        display_name: Label for clients (e.g. "Blood Pressure")
        keywords: Lowercase phrases that route a chat message to this metric
        unit: Suggested unit; stored units are never validated against it
        numeric: Whether string values must parse as a number
        value_pattern: Regex a string value must fully match, if any
        advice: Advice appended to latest-value replies, if any
        acknowledgement: Reply to a successful write, if any
        no_data: Reply when no record of this metric exists
    """
    canonical_name: str
    display_name: str
    keywords: Tuple[str, ...]
    unit: str
    numeric: bool
    value_pattern: Optional[str]
    advice: Optional[str]
    acknowledgement: Optional[str]
    no_data: str

    @property
    def human_name(self) -> str:
        return humanize(self.canonical_name)

    def accepts_string_value(self, value: str) -> bool:
        """Check a string value against this metric's format rules."""
        cleaned = value.strip()
        if self.value_pattern and not re.match(self.value_pattern, cleaned):
            return False
        if self.numeric:
            try:
                return math.isfinite(float(cleaned))
            except ValueError:
                return False
        return True


def humanize(metric_type: str) -> str:
    """Turn a canonical metric name into words: "heart_rate" -> "heart rate"."""
    return metric_type.replace("_", " ")


def _get_config_path() -> Path:
    return Path(__file__).parent / "metrics.yaml"


def _load_yaml_config() -> Dict[str, Any]:
    """
    Load and parse metrics.yaml.

    Raises:
        FileNotFoundError: If metrics.yaml is not found
        yaml.YAMLError: If YAML parsing fails
    """
    config_path = _get_config_path()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error("Metrics config file not found", extra={"path": str(config_path)})
        raise
    except yaml.YAMLError as e:
        logger.error("Failed to parse metrics config", extra={"path": str(config_path), "error": str(e)})
        raise


def _validate_metric_entry(raw: Dict[str, Any], index: int) -> None:
    """
    Validate a single metric entry from YAML.

    Raises:
        ConfigurationError: If required fields are missing or invalid
    """
    if not isinstance(raw, dict) or not raw.get("canonical_name"):
        raise ConfigurationError(f"Metric at index {index} is missing required field: 'canonical_name'")

    name = raw["canonical_name"]
    keywords = raw.get("keywords")
    if keywords is not None and not isinstance(keywords, list):
        raise ConfigurationError(f"Metric '{name}' has invalid keywords: must be a list")

    pattern = raw.get("value_pattern")
    if pattern is not None:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(f"Metric '{name}' has invalid value_pattern: {e}") from e


def _parse_metric_entry(raw: Dict[str, Any]) -> MetricDefinition:
    canonical_name = _normalize_metric_name(raw["canonical_name"]).replace(" ", "_")
    human_name = humanize(canonical_name)
    keywords = raw.get("keywords") or [human_name]

    return MetricDefinition(
        canonical_name=canonical_name,
        display_name=raw.get("display_name", human_name.title()),
        keywords=tuple(str(k).lower() for k in keywords),
        unit=raw.get("unit", ""),
        numeric=bool(raw.get("numeric", False)),
        value_pattern=raw.get("value_pattern"),
        advice=raw.get("advice"),
        acknowledgement=raw.get("acknowledgement"),
        no_data=raw.get(
            "no_data",
            f"I don't have any {human_name} data recorded yet. Would you like to log your {human_name}?",
        ),
    )


@lru_cache(maxsize=1)
def _load_registry() -> Tuple[MetricDefinition, ...]:
    """Load, validate and cache all metric definitions in file order."""
    config = _load_yaml_config()

    definitions = []
    seen = set()
    for i, raw in enumerate(config.get("metrics") or []):
        _validate_metric_entry(raw, i)
        metric = _parse_metric_entry(raw)
        if metric.canonical_name in seen:
            raise ConfigurationError(f"Duplicate metric: '{metric.canonical_name}'")
        seen.add(metric.canonical_name)
        definitions.append(metric)

    logger.debug("Metric registry loaded", extra={"metric_count": len(definitions)})
    return tuple(definitions)


def _normalize_metric_name(name: str) -> str:
    """Lowercase, strip and collapse whitespace/underscores to single spaces."""
    if not name:
        return ""
    normalized = name.lower().strip()
    return re.sub(r"[\s_]+", " ", normalized)


def get_metric(metric_name: str) -> MetricDefinition:
    """
    Get a metric definition by canonical name (case-insensitive).

    Raises:
        KeyError: If the metric is not in the registry
    """
    wanted = _normalize_metric_name(metric_name)
    for metric in _load_registry():
        if _normalize_metric_name(metric.canonical_name) == wanted:
            return metric
    raise KeyError(f"Unknown metric: '{metric_name}'")


def list_metrics() -> Dict[str, MetricDefinition]:
    """Map canonical names to definitions, in registry order."""
    return {m.canonical_name: m for m in _load_registry()}


def metric_types() -> Tuple[str, ...]:
    """Canonical names of all registered metrics, in registry order."""
    return tuple(m.canonical_name for m in _load_registry())
