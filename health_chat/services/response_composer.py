"""
Render classified intents as assistant replies.

All reply text comes from the response catalog and the metric registry;
this module only selects and fills templates. The greeting branch is the
only non-deterministic one, and its random source can be injected.
"""
import random
from typing import Callable, Dict, List, Optional, Sequence

from health_chat.core.metric_registry import get_metric, humanize
from health_chat.core.response_catalog import ResponseCatalog, get_catalog
from health_chat.models import MeasurementRecord, MetricValue
from health_chat.services.intent_matcher import Intent, IntentKind


def format_value(value: MetricValue) -> str:
    """
    Render a measurement value for a reply.

    Structured values are joined with "/" in key order, so
    {"systolic": 120, "diastolic": 80} renders as "120/80".
    """
    if isinstance(value, dict):
        return "/".join(str(v) for v in value.values())
    return str(value)


class ResponseComposer:
    """
    Turns an Intent into reply text.

    Args:
        catalog: Canned texts; defaults to the bundled responses.yaml
        rng: Object with a `choice(seq)` method used for greetings;
            defaults to the `random` module
    """

    def __init__(self, catalog: Optional[ResponseCatalog] = None, rng=None):
        self._catalog = catalog or get_catalog()
        self._rng = rng or random
        self._renderers: Dict[IntentKind, Callable[[Intent], str]] = {
            IntentKind.GREETING: self._greeting,
            IntentKind.METRIC_QUERY: self._metric_query,
            IntentKind.SUMMARY: self._summary,
            IntentKind.HELP: self._help,
            IntentKind.UNKNOWN: self._unknown,
        }

    def compose(self, intent: Intent) -> str:
        return self._renderers[intent.kind](intent)

    def _greeting(self, intent: Intent) -> str:
        return self._rng.choice(self._catalog.greetings)

    def _metric_query(self, intent: Intent) -> str:
        metric = get_metric(intent.metric_type)
        if not intent.records:
            return metric.no_data

        # Last inserted, not most recent by timestamp
        latest = intent.records[-1]
        return self._catalog.metric_latest.format(
            metric=metric.human_name,
            value=format_value(latest.value),
            unit=latest.unit,
            advice=metric.advice or self._catalog.generic_advice,
        )

    def _summary(self, intent: Intent) -> str:
        return self.summarize(intent.records)

    def _help(self, intent: Intent) -> str:
        return self._catalog.help

    def _unknown(self, intent: Intent) -> str:
        return self._catalog.unknown.format(message=intent.text)

    def summarize(self, records: Sequence[MeasurementRecord]) -> str:
        """
        Build the multi-line health summary.

        One line per metric type, in order of first appearance, showing the
        last inserted value of that type and how many records it has.
        """
        if not records:
            return self._catalog.summary_empty

        groups: Dict[str, List[MeasurementRecord]] = {}
        for record in records:
            groups.setdefault(record.type, []).append(record)

        lines = [self._catalog.summary_header, ""]
        for metric_type, group in groups.items():
            latest = group[-1]
            lines.append(self._catalog.summary_line.format(
                label=humanize(metric_type).upper(),
                value=format_value(latest.value),
                unit=latest.unit,
                count=len(group),
            ))
        lines.append("")
        lines.append(self._catalog.summary_footer)
        return "\n".join(lines)
