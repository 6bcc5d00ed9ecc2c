"""
Core module: configuration, logging, errors and the bundled data tables.

This module provides:
- Settings: Application configuration via pydantic-settings
- Exceptions: HealthChatError hierarchy with HTTP status codes
- Metric registry: metric definitions loaded from metrics.yaml
- Response catalog: canned reply texts loaded from responses.yaml

Dependency-injection functions live in health_chat.core.dependencies and
are imported from there directly.
"""
from health_chat.core.config import settings, Settings
from health_chat.core.exceptions import (
    HealthChatError,
    StorageError,
    ConfigurationError,
    setup_exception_handlers,
)
from health_chat.core.metric_registry import (
    MetricDefinition,
    get_metric,
    list_metrics,
    metric_types,
    humanize,
)
from health_chat.core.response_catalog import ResponseCatalog, get_catalog

__all__ = [
    "settings",
    "Settings",
    "HealthChatError",
    "StorageError",
    "ConfigurationError",
    "setup_exception_handlers",
    "MetricDefinition",
    "get_metric",
    "list_metrics",
    "metric_types",
    "humanize",
    "ResponseCatalog",
    "get_catalog",
]
