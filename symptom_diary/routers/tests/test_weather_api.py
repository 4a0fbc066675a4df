"""API tests for the weather association routes."""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from symptom_diary.config import get_settings
from symptom_diary.main import create_app
from symptom_diary.weather.tests.conftest import BASE_DATE, bucket_days, diary, make_days


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def feature_payload(days) -> list[dict]:
    return [d.to_dict() for d in days]


def test_health_check(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_app_reads_name_and_debug_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYMPTOM_DIARY_APP_NAME", "Diary Test API")
    monkeypatch.setenv("SYMPTOM_DIARY_DEBUG", "true")
    get_settings.cache_clear()
    try:
        app = create_app()
    finally:
        get_settings.cache_clear()

    assert app.title == "Diary Test API"
    assert app.debug is True


class TestAssociationRoute:
    def test_high_confidence_analysis(self, client: TestClient) -> None:
        days = diary(
            bucket_days(10, 6, delta=-10.0),
            bucket_days(10, 4, delta=-5.0),
            bucket_days(45, 9, delta=1.0),
        )
        response = client.post(
            "/api/v1/weather/association", json={"features": feature_payload(days)}
        )
        assert response.status_code == 200

        data = response.json()
        delta = data["pressure_delta_24h"]
        assert delta["enabled"] is True
        assert delta["confidence"] == "high"
        assert delta["buckets"][0]["headache_rate_display"] == "60%"
        assert delta["buckets"][0]["mean_pain_max_display"] == "6.0"
        assert delta["relative_risk"]["rr"] == pytest.approx(3.0)
        assert delta["relative_risk"]["rr_display"] == "3.0×"
        assert delta["relative_risk"]["abs_diff_display"] == "+40 pp"
        assert data["absolute_pressure"] is not None
        assert data["disclaimer"].startswith("Indicative only")

    def test_insufficient_data(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/weather/association",
            json={"features": feature_payload(diary(make_days(15)))},
        )
        assert response.status_code == 200
        delta = response.json()["pressure_delta_24h"]
        assert delta["enabled"] is False
        assert delta["confidence"] == "insufficient"
        assert delta["buckets"] == []
        assert delta["relative_risk"] is None

    def test_duplicate_dates_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/weather/association",
            json={"features": feature_payload(make_days(1) * 2)},
        )
        assert response.status_code == 422
        assert response.json()["detail"] == "Duplicate dates in features"

    def test_out_of_range_pain_rejected(self, client: TestClient) -> None:
        payload = feature_payload(make_days(1))
        payload[0]["pain_max"] = 11
        response = client.post("/api/v1/weather/association", json={"features": payload})
        assert response.status_code == 422


def diary_request(n_days: int, **overrides) -> dict:
    """Diary days with a noon snapshot each; the first 10 days see a strong drop."""
    days, logs = [], []
    for i in range(n_days):
        day = (BASE_DATE + timedelta(days=i)).isoformat()
        strong = i < 10
        days.append({"date": day, "documented": True, "headache": strong, "pain_max": 6 if strong else None})
        logs.append(
            {
                "id": i + 1,
                "snapshot_date": day,
                "requested_at": f"{day}T11:00:00Z",
                "pressure_mb": 1012.0,
                "pressure_change_24h": -9.0 if strong else 0.5,
            }
        )
    body = {"days": days, "entries": [], "weather_logs": logs}
    body.update(overrides)
    return body


class TestDiaryRoutes:
    def test_day_features(self, client: TestClient) -> None:
        response = client.post("/api/v1/weather/day-features", json=diary_request(3))
        assert response.status_code == 200

        data = response.json()
        assert [f["date"] for f in data["features"]] == ["2026-01-01", "2026-01-02", "2026-01-03"]
        assert all(f["weather_coverage"] == "snapshot" for f in data["features"])
        assert data["coverage_counts"]["days_with_snapshot_weather"] == 3

    def test_association_from_diary(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/weather/association/from-diary", json=diary_request(25)
        )
        assert response.status_code == 200

        data = response.json()
        assert data["coverage"]["days_with_snapshot_weather"] == 25
        assert data["coverage"]["days_with_entry_weather"] == 0
        delta = data["pressure_delta_24h"]
        assert delta["confidence"] == "low"
        assert delta["relative_risk"]["abs_diff_display"] == "+100 pp"
        assert delta["relative_risk"]["rr"] is None
        assert delta["relative_risk"]["rr_display"] == "–"

    def test_invalid_timezone(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/weather/day-features",
            json=diary_request(1, timezone="Mars/Olympus_Mons"),
        )
        assert response.status_code == 400
        assert "Mars/Olympus_Mons" in response.json()["detail"]
