"""
API endpoint tests for the bedtime estimator service.

Run: python -m pytest tests/test_api_server.py -v
"""

import pytest
from fastapi.testclient import TestClient

from api import api_server
from core import BedtimeEstimator, EstimatorConfig, FALLBACK_MESSAGE


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api_server, "estimator", BedtimeEstimator())
    return TestClient(api_server.app)


@pytest.fixture
def unavailable_client(monkeypatch):
    monkeypatch.setattr(
        api_server, "estimator", BedtimeEstimator(EstimatorConfig.unavailable("test"))
    )
    return TestClient(api_server.app)


class TestStatusEndpoints:

    def test_root(self, client):
        body = client.get("/").json()
        assert body["status"] == "ok"
        assert body["model_available"] is True

    def test_health_reports_unavailable_model(self, unavailable_client):
        response = unavailable_client.get("/health")
        assert response.status_code == 200
        assert response.json()["model_available"] is False

    def test_defaults(self, client):
        body = client.get("/api/defaults").json()
        assert body["wake_time"] == "07:00"
        assert body["sleep_goal_hours"] == 8.0
        assert body["coffee_cups"] == 0
        assert body["sleep_range_hours"] == [4.0, 12.0]
        assert body["coffee_range_cups"] == [0, 20]

    def test_model(self, client):
        body = client.get("/api/model").json()
        assert body["available"] is True
        assert set(body["coefficients"]) == {"intercept", "c_wake", "c_sleep", "c_coffee"}

    def test_model_unavailable(self, unavailable_client):
        body = unavailable_client.get("/api/model").json()
        assert body == {"available": False, "source": "test", "coefficients": None}


class TestBedtimeEndpoint:

    def test_defaults_body(self, client):
        response = client.post("/api/bedtime", json={})
        assert response.status_code == 200
        body = response.json()
        assert body["recommended_bedtime"] == "22:54"
        assert body["message"] == "Your ideal bedtime is 22:54"
        assert body["predicted_sleep_hours"] == pytest.approx(8.097)
        assert body["error"] is None

    def test_twelve_hour_clock(self, client):
        body = client.post("/api/bedtime", json={"clock": "12h"}).json()
        assert body["recommended_bedtime"] == "10:54 PM"

    def test_recomputes_on_each_change(self, client):
        first = client.post("/api/bedtime", json={"coffee_cups": 0}).json()
        second = client.post("/api/bedtime", json={"coffee_cups": 10}).json()
        assert first["recommended_bedtime"] != second["recommended_bedtime"]

    @pytest.mark.parametrize("payload", [
        {"coffee_cups": 25},
        {"coffee_cups": 2.5},
        {"sleep_goal_hours": 13},
        {"wake_time": "25:00"},
    ])
    def test_invalid_input_returns_fallback(self, client, payload):
        response = client.post("/api/bedtime", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["recommended_bedtime"] == FALLBACK_MESSAGE
        assert body["message"] == FALLBACK_MESSAGE
        assert body["error"] == "InvalidInput"
        assert body["predicted_sleep_hours"] is None

    def test_unavailable_model_returns_fallback(self, unavailable_client):
        body = unavailable_client.post("/api/bedtime", json={}).json()
        assert body["recommended_bedtime"] == FALLBACK_MESSAGE
        assert body["error"] == "ModelUnavailable"

    @pytest.mark.parametrize("payload", [
        {"clock": "utc"},
        {"coffee_cups": "lots"},
    ])
    def test_malformed_body_rejected(self, client, payload):
        assert client.post("/api/bedtime", json=payload).status_code == 422
