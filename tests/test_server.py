"""
Tests for the HTTP API.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    from server import app

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class TestStandards:
    """Standards endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_table(self, client):
        response = client.get("/api/standards/male")

        assert response.status_code == 200
        rows = response.json()
        assert len(rows) == 13
        assert rows[0]["weight_kg"] == 3.3

    def test_lookup(self, client):
        response = client.get("/api/standards/female/6")

        assert response.json()["weight_kg"] == 7.3

    def test_invalid_sex(self, client):
        assert client.get("/api/standards/other").status_code == 422

    def test_expected_growth(self, client):
        response = client.get("/api/expected-growth", params={"age_months": 6, "sex": "female"})

        assert response.json() == {"weight": 400, "height": 17, "head_circ": 7}


class TestProgress:
    """Progress endpoints."""

    def test_target_progress(self, client):
        response = client.get(
            "/api/progress/target",
            params={"birth": 3300, "current": 4300, "target_gain": 1200},
        )

        data = response.json()
        assert data["result"]["percentage"] == 83
        assert data["status"] == "On Target"
        assert data["band"] == "progressing"

    def test_standard_progress(self, client):
        response = client.get("/api/progress/standard", params={
            "value": 600, "unit": "mm", "age_months": 6, "sex": "male", "metric": "height",
        })

        data = response.json()
        assert data["percentage"] == 89
        assert data["who_value"] == 67.6

    def test_unit_mismatch(self, client):
        response = client.get("/api/progress/standard", params={
            "value": 600, "unit": "g", "age_months": 6, "sex": "male", "metric": "height",
        })

        assert response.status_code == 400


class TestRecommendations:
    """Recommendations and settings injection."""

    def test_defaults(self, client):
        response = client.get("/api/recommendations", params={"age_months": 2, "sex": "male"})

        data = response.json()
        assert data["weight_gain"]["min"] == 218
        assert data["weight_gain_per_week"] == "218-294 grams"

    def test_settings_override(self, client):
        from server import app, get_settings
        from src.config import GrowthSettings

        app.dependency_overrides[get_settings] = lambda: GrowthSettings(band_basis="monthly")
        response = client.get("/api/recommendations", params={"age_months": 2, "sex": "male"})

        assert response.json()["weight_gain"]["min"] == 935

    def test_settings_are_loaded_once(self, tmp_path, monkeypatch):
        from server import get_settings

        config = tmp_path / "sprout.yaml"
        config.write_text("band_basis: monthly\n")
        monkeypatch.setenv("SPROUT_CONFIG", str(config))
        get_settings.cache_clear()
        try:
            first = get_settings()
            config.write_text("band_basis: weekly\n")

            assert get_settings() is first
            assert first.band_basis.value == "monthly"
        finally:
            get_settings.cache_clear()


class TestAssessments:
    """Assessment endpoint."""

    def test_create_assessment(self, client):
        response = client.post("/api/assessments", json={
            "record": {
                "child_name": "Leo",
                "sex": "male",
                "birth_date": "2024-01-10",
                "birth_weight": {"value": 3.3, "unit": "kg"},
                "entries": [
                    {"recorded_on": "2024-02-10", "weight": {"value": 4500, "unit": "g"}},
                    {"recorded_on": "2024-03-10", "weight": {"value": 4700, "unit": "g"}},
                ],
            },
            "as_of": "2024-03-10",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["age_months"] == 2
        weight = next(m for m in data["metrics"] if m["metric"] == "weight")
        assert weight["gain"] == 200
        assert weight["sufficient"] is False

    def test_overflowing_measurement(self, client):
        response = client.post("/api/assessments", json={
            "record": {
                "sex": "male",
                "age_months": 2,
                "birth_weight": {"value": 3.3, "unit": "kg"},
                "entries": [{"recorded_on": "2024-03-01", "weight": {"value": 1e306, "unit": "kg"}}],
            },
        })

        assert response.status_code == 200
        weight = next(m for m in response.json()["metrics"] if m["metric"] == "weight")
        assert weight["gain"] == -3300

    def test_invalid_record(self, client):
        response = client.post("/api/assessments", json={
            "record": {"sex": "male", "birth_weight": {"value": 50, "unit": "cm"}},
        })

        assert response.status_code == 422


class TestSleep:
    """Sleep endpoint."""

    def test_sleep(self, client):
        response = client.get("/api/sleep", params={"age_months": 18})

        assert response.json()["age_group"] == "Toddler (1-2 years)"

    def test_negative_age(self, client):
        assert client.get("/api/sleep", params={"age_months": -1}).status_code == 422
