"""
Tests for reply rendering.

Greetings are random; a stub random source is injected so the tests can
check which greeting was picked without relying on a seed.
"""
import random

import pytest

from health_chat.core.metric_registry import get_metric
from health_chat.core.response_catalog import get_catalog
from health_chat.services.intent_matcher import match_intent
from health_chat.services.response_composer import ResponseComposer, format_value


class PickIndex:
    """Random source whose choice() always returns the item at `index`."""

    def __init__(self, index):
        self.index = index
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        return seq[self.index]


@pytest.fixture
def composer():
    return ResponseComposer(rng=PickIndex(0))


def reply(composer, text, records=()):
    return composer.compose(match_intent(text, list(records)))


# =============================================================================
# Greeting
# =============================================================================

@pytest.mark.parametrize("index", [0, 1, 2])
def test_greeting_uses_injected_random_source(index):
    rng = PickIndex(index)
    composer = ResponseComposer(rng=rng)
    assert reply(composer, "hello") == get_catalog().greetings[index]
    assert rng.calls == 1


def test_greeting_with_real_random_is_a_member():
    composer = ResponseComposer(rng=random.Random(42))
    for _ in range(10):
        assert reply(composer, "hi") in get_catalog().greetings


# =============================================================================
# Metric query
# =============================================================================

def test_metric_query_reports_latest_by_insertion(composer, make_record):
    # The second record is back-dated but was inserted last
    records = [
        make_record("weight", 70, "kg", minutes=60),
        make_record("weight", 68, "kg", minutes=0),
    ]
    text = reply(composer, "what's my weight", records)
    assert text == (
        "Your latest weight is 68 kg. " + get_metric("weight").advice
    )


def test_metric_query_without_records_asks_to_log(composer, make_record):
    records = [make_record("weight", 70, "kg")]
    assert reply(composer, "show my blood pressure", records) == get_metric("blood_pressure").no_data


def test_metric_without_specific_advice_uses_generic(composer, make_record):
    records = [make_record("steps", 9000, "steps")]
    text = reply(composer, "my steps", records)
    assert text.startswith("Your latest steps is 9000 steps. ")
    assert text.endswith(get_catalog().generic_advice)


def test_blood_pressure_string_and_object_values(composer, make_record):
    records = [make_record("blood_pressure", "120/80", "mmHg")]
    assert "Your latest blood pressure is 120/80 mmHg." in reply(composer, "blood pressure", records)

    records.append(make_record("blood_pressure", {"systolic": 130, "diastolic": 85}, "mmHg"))
    assert "Your latest blood pressure is 130/85 mmHg." in reply(composer, "blood pressure", records)


@pytest.mark.parametrize("value,rendered", [
    (70, "70"),
    (70.0, "70.0"),
    (72.5, "72.5"),
    ("120/80", "120/80"),
    ({"systolic": 120, "diastolic": 80}, "120/80"),
])
def test_format_value(value, rendered):
    assert format_value(value) == rendered


# =============================================================================
# Summary
# =============================================================================

def test_summary_without_records(composer):
    assert reply(composer, "summary") == get_catalog().summary_empty


def test_summary_lines_per_type_in_first_occurrence_order(composer, make_record):
    records = [
        make_record("weight", 70, "kg"),
        make_record("heart_rate", 72, "bpm"),
        make_record("weight", 68, "kg"),
        make_record("blood_pressure", "120/80", "mmHg"),
    ]
    lines = reply(composer, "give me a summary", records).split("\n")

    catalog = get_catalog()
    assert lines[0] == catalog.summary_header
    assert lines[1] == ""
    assert lines[2:5] == [
        "• **WEIGHT**: 68 kg (2 recordings)",
        "• **HEART RATE**: 72 bpm (1 recordings)",
        "• **BLOOD PRESSURE**: 120/80 mmHg (1 recordings)",
    ]
    assert lines[5] == ""
    assert lines[6] == catalog.summary_footer


# =============================================================================
# Help / Unknown
# =============================================================================

def test_help(composer):
    text = reply(composer, "what can you do")
    assert text == get_catalog().help
    assert text.startswith("I can help you:")


def test_unknown_echoes_message_verbatim(composer):
    text = reply(composer, "Tell Me A Joke")
    assert 'asking about "Tell Me A Joke"' in text
