"""API endpoint tests using TestClient."""

import pytest
from fastapi.testclient import TestClient

from climate_stats.api.app import create_app
from climate_stats.config import MAX_SERIES_LENGTH


@pytest.fixture
def client():
    return TestClient(create_app(), raise_server_exceptions=True)


@pytest.fixture
def request_body() -> dict:
    """30 years of yearly precipitation totals with a wetter recent decade."""
    values = [2.0, 3.5, 1.0, 4.5, 2.5, 3.0, 1.5, 2.0, 3.0, 2.5,
              3.0, 4.5, 2.0, 5.0, 3.5, 4.0, 2.5, 3.0, 4.0, 3.5,
              5.0, 6.5, 4.0, 7.0, 5.5, 6.0, 4.5, 5.0, 6.0, 5.5]
    return {
        "variable": "precipitation",
        "time_series": [{"year": 1994 + i, "value": v} for i, v in enumerate(values)],
        "threshold": 4.0,
        "baseline_period": {"start_year": 1994, "end_year": 2003},
        "recent_period": {"start_year": 2014, "end_year": 2023},
        "seed": 42,
    }


class TestHealthEndpoint:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestStatisticsEndpoint:
    def test_full_response(self, client, request_body):
        resp = client.post("/forecast/statistics", json=request_body)
        assert resp.status_code == 200
        data = resp.json()

        assert data["variable"] == "precipitation"
        assert data["units"] == "mm"
        assert data["n_years"] == 30
        assert set(data["percentiles"]) == {"p10", "p25", "p50", "p75", "p90", "p95"}
        assert 0 <= data["p_exceed"] <= 1
        low, high = data["p_exceed_CI"]
        assert 0 <= low <= high <= 1

        trend = data["trend"]
        assert trend["method"] == "Mann-Kendall + Sen's slope"
        assert trend["direction"] == "increasing"
        assert trend["slope"] > 0
        assert trend["p_value"] < 0.05

        comparison = data["baseline_vs_recent"]
        assert comparison["status"] == "ok"
        # baseline: 1 of 10 above 4.0; recent: 9 of 10
        assert comparison["p_exceed_baseline"] == pytest.approx(0.1)
        assert comparison["p_exceed_recent"] == pytest.approx(0.9)
        assert comparison["delta_percent"] == pytest.approx(800.0)
        assert len(data["time_series"]) == 30

    def test_seed_makes_ci_reproducible(self, client, request_body):
        first = client.post("/forecast/statistics", json=request_body).json()
        second = client.post("/forecast/statistics", json=request_body).json()
        assert first["p_exceed_CI"] == second["p_exceed_CI"]

    def test_minimal_request(self, client):
        resp = client.post("/forecast/statistics", json={
            "variable": "temperature",
            "time_series": [{"year": 2020, "value": 21.5}],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["units"] == "°C"
        assert data["mean"] == 21.5
        assert data["p_exceed"] is None
        assert data["trend"] is None
        assert "Trend not computed" in data["caveats"]

    def test_zero_baseline_reports_null_delta(self, client):
        resp = client.post("/forecast/statistics", json={
            "variable": "precipitation",
            "time_series": [{"year": 2000 + i, "value": v} for i, v in enumerate([0, 0, 0, 0, 1, 1, 0, 1])],
            "threshold": 0.5,
            "baseline_period": {"start_year": 2000, "end_year": 2003},
            "recent_period": {"start_year": 2004, "end_year": 2007},
            "seed": 1,
        })
        assert resp.status_code == 200
        comparison = resp.json()["baseline_vs_recent"]
        assert comparison["status"] == "baseline_zero"
        assert comparison["delta_percent"] is None
        assert comparison["p_exceed_recent"] == 0.75

    def test_empty_series_rejected(self, client):
        resp = client.post("/forecast/statistics", json={"variable": "temperature", "time_series": []})
        assert resp.status_code == 422

    def test_overlapping_periods_rejected(self, client, request_body):
        request_body["recent_period"] = {"start_year": 2000, "end_year": 2023}
        resp = client.post("/forecast/statistics", json=request_body)
        assert resp.status_code == 422
        assert "overlaps" in resp.json()["detail"]

    def test_empty_period_rejected(self, client, request_body):
        request_body["recent_period"] = {"start_year": 2030, "end_year": 2040}
        resp = client.post("/forecast/statistics", json=request_body)
        assert resp.status_code == 422
        assert "recent period" in resp.json()["detail"]

    def test_reversed_period_rejected(self, client, request_body):
        request_body["baseline_period"] = {"start_year": 2003, "end_year": 1994}
        resp = client.post("/forecast/statistics", json=request_body)
        assert resp.status_code == 422

    def test_too_few_iterations_rejected(self, client, request_body):
        request_body["iterations"] = 5
        resp = client.post("/forecast/statistics", json=request_body)
        assert resp.status_code == 422

    def test_overlong_series_rejected(self, client):
        resp = client.post("/forecast/statistics", json={
            "variable": "temperature",
            "time_series": [{"year": 1000 + i, "value": 1.0} for i in range(MAX_SERIES_LENGTH + 1)],
        })
        assert resp.status_code == 422

    def test_fractional_year_rejected(self, client, request_body):
        request_body["time_series"][0]["year"] = 1993.5
        resp = client.post("/forecast/statistics", json=request_body)
        assert resp.status_code == 422

    def test_extreme_values_keep_finite_std(self, client):
        resp = client.post("/forecast/statistics", json={
            "variable": "temperature",
            "time_series": [{"year": 2000, "value": 1e200}, {"year": 2001, "value": -1e200}],
        })
        assert resp.status_code == 200
        assert resp.json()["std"] == pytest.approx(1e200)
