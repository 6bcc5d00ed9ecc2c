"""
Canned assistant texts loaded from responses.yaml.

The composer and the insights engine never hard-code reply strings; they
read them from the immutable ResponseCatalog returned by get_catalog().
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from health_chat.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResponseCatalog:
    greetings: Tuple[str, ...]
    metric_latest: str
    generic_advice: str
    generic_acknowledgement: str
    summary_header: str
    summary_line: str
    summary_footer: str
    summary_empty: str
    help: str
    unknown: str
    insights_no_data: str
    track_more_metrics: str
    log_more_often: str
    encouragement: str


def _get_config_path() -> Path:
    return Path(__file__).parent / "responses.yaml"


def _require(section: Dict[str, Any], key: str, where: str) -> Any:
    value = section.get(key)
    if value in (None, "", []):
        raise ConfigurationError(f"responses.yaml is missing '{where}{key}'")
    return value


@lru_cache(maxsize=1)
def get_catalog() -> ResponseCatalog:
    """
    Load and cache the response catalog.

    Raises:
        ConfigurationError: If a required text is missing
    """
    config_path = _get_config_path()
    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    summary = raw.get("summary") or {}
    insights = raw.get("insights") or {}

    greetings = _require(raw, "greetings", "")
    if not isinstance(greetings, list):
        raise ConfigurationError("responses.yaml 'greetings' must be a list")

    catalog = ResponseCatalog(
        greetings=tuple(greetings),
        metric_latest=_require(raw, "metric_latest", ""),
        generic_advice=_require(raw, "generic_advice", ""),
        generic_acknowledgement=_require(raw, "generic_acknowledgement", ""),
        summary_header=_require(summary, "header", "summary."),
        summary_line=_require(summary, "line", "summary."),
        summary_footer=_require(summary, "footer", "summary."),
        summary_empty=_require(summary, "empty", "summary."),
        help=_require(raw, "help", ""),
        unknown=_require(raw, "unknown", ""),
        insights_no_data=_require(insights, "no_data", "insights."),
        track_more_metrics=_require(insights, "track_more_metrics", "insights."),
        log_more_often=_require(insights, "log_more_often", "insights."),
        encouragement=_require(insights, "encouragement", "insights."),
    )
    logger.debug("Response catalog loaded", extra={"path": str(config_path)})
    return catalog
