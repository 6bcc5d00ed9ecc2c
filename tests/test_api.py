"""
Tests for the HTTP endpoints.
"""
import pytest

from health_chat.core.exceptions import StorageError
from health_chat.core.metric_registry import get_metric
from health_chat.core.response_catalog import get_catalog
from health_chat.core import dependencies as deps
from health_chat.repositories import InMemoryMetricStore


def record(client, **payload):
    return client.post("/api/health/data", json=payload)


# =============================================================================
# Health & banner
# =============================================================================

def test_banner(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"message": "Health Measures Chatbot API is running!"}


def test_liveness(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["timestamp"].endswith("Z")


def test_readiness(client):
    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert {d["name"] for d in data["dependencies"]} == {"metric_store", "conversation_store"}


def test_readiness_reports_unavailable_store(test_app, client):
    class BrokenStore(InMemoryMetricStore):
        def ping(self):
            raise StorageError(operation="ping")

    test_app.dependency_overrides[deps.get_metric_store] = lambda: BrokenStore()
    response = client.get("/ready")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    broken = next(d for d in data["dependencies"] if d["name"] == "metric_store")
    assert broken["status"] == "unavailable"


# =============================================================================
# Measurements
# =============================================================================

def test_record_measurement(client):
    response = record(client, type="weight", value=70, unit="kg", notes="morning")
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Health metric recorded successfully"
    assert body["acknowledgement"] == get_metric("weight").acknowledgement

    data = body["data"]
    assert data["id"]
    assert data["type"] == "weight"
    assert data["value"] == 70
    assert data["unit"] == "kg"
    assert data["notes"] == "morning"
    assert "timestamp" in data


def test_record_uses_generic_acknowledgement(client):
    response = record(client, type="steps", value=9000, unit="steps")
    assert response.status_code == 201
    assert response.json()["acknowledgement"] == get_catalog().generic_acknowledgement


def test_record_keeps_given_timestamp(client):
    response = record(client, type="weight", value=70, unit="kg", timestamp="2025-01-01T10:00:00Z")
    assert response.json()["data"]["timestamp"].startswith("2025-01-01T10:00:00")


@pytest.mark.parametrize("payload", [
    {"type": "blood_pressure", "value": "120/80", "unit": "mmHg"},
    {"type": "blood_pressure", "value": {"systolic": 120, "diastolic": 80}, "unit": "mmHg"},
    {"type": "weight", "value": "72.5", "unit": "kg"},
    {"type": "temperature", "value": 36.6, "unit": "°C"},
])
def test_record_accepts_valid_values(client, payload):
    assert record(client, **payload).status_code == 201


@pytest.mark.parametrize("payload", [
    {"type": "cholesterol", "value": 180, "unit": "mg/dL"},
    {"type": "weight", "value": 70, "unit": ""},
    {"type": "weight", "value": 70},
    {"type": "weight", "unit": "kg"},
    {"type": "weight", "value": "seventy", "unit": "kg"},
    {"type": "weight", "value": "", "unit": "kg"},
    {"type": "blood_pressure", "value": "120", "unit": "mmHg"},
    {"type": "weight", "value": 70, "unit": "kg", "timestamp": "yesterday"},
])
def test_record_rejects_invalid_payloads(client, payload):
    assert record(client, **payload).status_code == 422


def test_blood_pressure_format_message(client):
    response = record(client, type="blood_pressure", value="high", unit="mmHg")
    assert response.status_code == 422
    assert 'Blood Pressure must be in format "systolic/diastolic"' in response.text


def test_list_measurements_in_insertion_order(client):
    record(client, type="weight", value=70, unit="kg", timestamp="2025-02-01T00:00:00Z")
    record(client, type="weight", value=68, unit="kg", timestamp="2025-01-01T00:00:00Z")

    response = client.get("/api/health/data")
    assert response.status_code == 200
    assert [r["value"] for r in response.json()] == [70, 68]


def test_list_measurements_per_user(client):
    record(client, type="weight", value=60, unit="kg", userId="alice")
    record(client, type="weight", value=90, unit="kg")

    assert [r["value"] for r in client.get("/api/health/data/alice").json()] == [60]
    assert [r["value"] for r in client.get("/api/health/data").json()] == [90]
    assert client.get("/api/health/data/nobody").json() == []


def test_storage_failure_returns_500(test_app, client):
    class FailingStore(InMemoryMetricStore):
        def append(self, *args, **kwargs):
            raise StorageError(operation="append_measurement")

    test_app.dependency_overrides[deps.get_metric_store] = lambda: FailingStore()
    response = record(client, type="weight", value=70, unit="kg")
    assert response.status_code == 500
    assert response.json()["detail"] == "Storage error during append_measurement"


# =============================================================================
# Insights
# =============================================================================

def test_insights_without_data(client):
    response = client.get("/api/health/insights")
    assert response.status_code == 200
    body = response.json()
    assert body == {"message": get_catalog().insights_no_data}
    assert "trends" not in body


def test_insights_weight_trend(client):
    record(client, type="weight", value=70, unit="kg", timestamp="2025-01-01T08:00:00Z")
    record(client, type="weight", value=68, unit="kg", timestamp="2025-01-08T08:00:00Z")

    body = client.get("/api/health/insights").json()
    assert body["totalRecords"] == 2
    assert body["metricsTracked"] == ["weight"]
    assert body["trends"]["weight"] == {
        "delta": -2,
        "percentDelta": -2.9,
        "direction": "decrease",
        "sampleCount": 2,
    }
    assert body["recommendations"][-1] == get_catalog().encouragement


def test_insights_zero_baseline_is_null(client):
    record(client, type="exercise_minutes", value=0, unit="minutes", userId="u1")
    record(client, type="exercise_minutes", value=45, unit="minutes", userId="u1")

    trend = client.get("/api/health/insights/u1").json()["trends"]["exercise_minutes"]
    assert trend["percentDelta"] is None
    assert trend["direction"] == "increase"


def test_insights_with_huge_integer_value(client):
    assert record(client, type="steps", value=1, unit="steps").status_code == 201
    assert record(client, type="steps", value=int("9" * 400), unit="steps").status_code == 201

    response = client.get("/api/health/insights")
    assert response.status_code == 200
    body = response.json()
    assert body["totalRecords"] == 2
    assert body["trends"] == {}


def test_insights_percent_rounds_halves_up(client):
    record(client, type="weight", value=400, unit="kg", timestamp="2025-01-01T08:00:00Z")
    record(client, type="weight", value=401, unit="kg", timestamp="2025-01-02T08:00:00Z")

    trend = client.get("/api/health/insights").json()["trends"]["weight"]
    assert trend["percentDelta"] == 0.3


def test_insights_for_other_user_is_isolated(client):
    record(client, type="weight", value=70, unit="kg")
    body = client.get("/api/health/insights/someone-else").json()
    assert body == {"message": get_catalog().insights_no_data}


# =============================================================================
# Chat
# =============================================================================

def test_chat_greeting(client):
    response = client.post("/api/chat", json={"message": "hello"})
    assert response.status_code == 200
    body = response.json()
    assert body["response"] in get_catalog().greetings
    assert body["sessionId"] == "default"
    assert [t["role"] for t in body["conversation"]] == ["user", "assistant"]
    assert body["conversation"][0]["text"] == "hello"


def test_chat_answers_from_recorded_data(client):
    record(client, type="weight", value=70, unit="kg", userId="u1")
    record(client, type="weight", value=68, unit="kg", userId="u1")

    response = client.post("/api/chat", json={"message": "what's my weight", "userId": "u1"})
    assert response.json()["response"].startswith("Your latest weight is 68 kg.")


def test_chat_greeting_beats_metric_query(client):
    response = client.post("/api/chat", json={"message": "hello, what's my blood pressure"})
    assert response.json()["response"] in get_catalog().greetings


def test_chat_summary(client):
    record(client, type="weight", value=70, unit="kg")
    record(client, type="blood_pressure", value="120/80", unit="mmHg")

    text = client.post("/api/chat", json={"message": "summary"}).json()["response"]
    assert "• **WEIGHT**: 70 kg (1 recordings)" in text
    assert "• **BLOOD PRESSURE**: 120/80 mmHg (1 recordings)" in text


def test_chat_conversation_is_capped_at_ten_turns(client):
    for i in range(7):
        body = client.post("/api/chat", json={"message": f"note {i}", "sessionId": "s1"}).json()
        assert len(body["conversation"]) == min(2 * (i + 1), 10)
        assert len(body["conversation"]) % 2 == 0

    assert body["conversation"][-2]["text"] == "note 6"
    assert len(client.get("/api/chat/history/s1").json()) == 14


def test_chat_conversation_follows_history_limit_setting(client, monkeypatch):
    from health_chat.core.config import settings

    monkeypatch.setattr(settings, "health_chat_history_limit", 4)
    for i in range(3):
        body = client.post("/api/chat", json={"message": f"note {i}", "sessionId": "s2"}).json()
    assert [t["text"] for t in body["conversation"]][::2] == ["note 1", "note 2"]


def test_chat_history_unknown_session(client):
    response = client.get("/api/chat/history/unknown")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize("payload", [
    {},
    {"message": ""},
    {"message": "x" * 2001},
])
def test_chat_rejects_invalid_messages(client, payload):
    assert client.post("/api/chat", json=payload).status_code == 422


# =============================================================================
# Metadata
# =============================================================================

def test_metric_catalogue(client):
    response = client.get("/api/health/metrics")
    assert response.status_code == 200
    metrics = response.json()["metrics"]
    assert len(metrics) == 10
    assert metrics[0]["canonicalName"] == "weight"
    bp = next(m for m in metrics if m["canonicalName"] == "blood_pressure")
    assert bp["valuePattern"] == r"^\d+/\d+$"
    assert bp["numeric"] is False
