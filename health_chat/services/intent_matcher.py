"""
Keyword-based intent classification for chat messages.

The message is lowercased and tested against a fixed sequence of keyword
predicates; the first one that matches decides the intent:

    1. greeting     "hello", "hi", "hey"
    2. metric query any keyword of a registered metric (registry order)
    3. summary      "summary", "overview"
    4. help         "help", "what can you do"
    5. unknown      nothing matched

Order is a tie-break: "hello, what's my weight" is a greeting. Matching is
plain substring containment, so "this" also contains "hi".
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from health_chat.core.metric_registry import list_metrics
from health_chat.models import MeasurementRecord

GREETING_KEYWORDS = ("hello", "hi", "hey")
SUMMARY_KEYWORDS = ("summary", "overview")
HELP_KEYWORDS = ("help", "what can you do")


class IntentKind(str, Enum):
    GREETING = "greeting"
    METRIC_QUERY = "metric_query"
    SUMMARY = "summary"
    HELP = "help"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Intent:
    """
    Classified chat message.

    Attributes:
        kind: Which reply family applies
        text: The original message, verbatim
        metric_type: Queried metric for METRIC_QUERY, otherwise None
        records: Records selected for the reply: the queried metric's records
            for METRIC_QUERY, every record for SUMMARY, empty otherwise.
            Always in insertion order.
    """
    kind: IntentKind
    text: str
    metric_type: Optional[str] = None
    records: Tuple[MeasurementRecord, ...] = ()


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def match_intent(text: str, records: Sequence[MeasurementRecord]) -> Intent:
    """
    Classify a message given the user's measurements.

    Args:
        text: Raw message text
        records: The user's measurements in insertion order

    Returns:
        Intent: The first matching intent, never None
    """
    msg = text.lower()

    if _contains_any(msg, GREETING_KEYWORDS):
        return Intent(kind=IntentKind.GREETING, text=text)

    for metric in list_metrics().values():
        if _contains_any(msg, metric.keywords):
            return Intent(
                kind=IntentKind.METRIC_QUERY,
                text=text,
                metric_type=metric.canonical_name,
                records=tuple(r for r in records if r.type == metric.canonical_name),
            )

    if _contains_any(msg, SUMMARY_KEYWORDS):
        return Intent(kind=IntentKind.SUMMARY, text=text, records=tuple(records))

    if _contains_any(msg, HELP_KEYWORDS):
        return Intent(kind=IntentKind.HELP, text=text)

    return Intent(kind=IntentKind.UNKNOWN, text=text)
