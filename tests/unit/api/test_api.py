from datetime import date
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from carbonroute.api.dependencies import get_emission_service
from carbonroute.core.exceptions import DirectionsError
from carbonroute.main import app
from carbonroute.models.route import RouteOptions
from carbonroute.models.weather import RouteWeather
from carbonroute.services.calculations import compute_all
from carbonroute.services.emission import EmissionService


@pytest.fixture
def emission_service(mock_maps_repository, mock_weather_repository):
    return EmissionService(mock_maps_repository, mock_weather_repository)


@pytest.fixture
def client(emission_service):
    app.dependency_overrides[get_emission_service] = lambda: emission_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def report_payload():
    return {
        "route": "bandung-jakarta",
        "results": [result.model_dump(mode="json") for result in compute_all(150)],
        "distance_km": 150,
        "scenario": {"traffic": "normal"},
    }


class TestGeneralEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_welcome(self, client):
        data = client.get("/api/v1").json()

        assert data["weather_adjustment_source"] in ("scenario", "live")
        assert "route_adjustment_enabled" in data


class TestEmissionEndpoints:
    """Tests for /api/v1/emissions."""

    def test_list_modes(self, client):
        response = client.get("/api/v1/emissions/modes")

        assert response.status_code == 200
        modes = response.json()
        assert [m["id"] for m in modes] == ["car", "bus", "motorcycle", "intercity_rail", "high_speed_rail"]
        assert modes[0]["base_rate"] == 0.069
        assert modes[4]["unit"] == "kWh/pkm"
        assert modes[4]["static_distance_km"] == 142.0

    def test_adjustment_factor(self, client):
        response = client.post(
            "/api/v1/emissions/adjustment-factor",
            json={"traffic": "very_heavy", "weather": "heavy_rain", "load_factor": "peak"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["adjustment_factor"] == pytest.approx(1.518)
        assert data["emission_factor"] == 2.6

    def test_adjustment_factor_rejects_unknown_value(self, client):
        response = client.post("/api/v1/emissions/adjustment-factor", json={"traffic": "gridlock"})

        assert response.status_code == 422

    def test_calculate_actual(self, client):
        response = client.post("/api/v1/emissions/calculate", json={"mode": "car"})

        assert response.status_code == 200
        data = response.json()
        assert data["calculation_mode"] == "actual"
        assert len(data["results"]) == 1
        assert data["results"][0]["distance_km"] == 151.23
        assert data["results"][0]["fuel_unit"] == "L"

    def test_calculate_prediction(self, client):
        response = client.post(
            "/api/v1/emissions/calculate",
            json={
                "mode": "car",
                "calculation_mode": "prediction",
                "scenario": {"energy_source": "renewable_electricity"},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["results"]) == 5
        assert all(r["emission_kg"] == 0 for r in data["results"])
        assert data["distances"]["high_speed_rail"]["source"] == "static"

    def test_calculate_unknown_route(self, client):
        response = client.post("/api/v1/emissions/calculate", json={"route": "bandung-bali", "mode": "car"})

        assert response.status_code == 400
        assert "Unknown route" in response.json()["detail"]

    def test_calculate_unknown_mode(self, client):
        response = client.post("/api/v1/emissions/calculate", json={"mode": "plane"})

        assert response.status_code == 422

    def test_pdf_report(self, client, report_payload):
        response = client.post("/api/v1/emissions/report/pdf", json=report_payload)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "attachment" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_csv_report(self, client, report_payload):
        response = client.post("/api/v1/emissions/report/csv", json=report_payload)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert len(response.text.strip().splitlines()) == 6

    def test_report_requires_results(self, client):
        response = client.post("/api/v1/emissions/report/pdf", json={"results": []})

        assert response.status_code == 422


class TestRouteEndpoints:
    """Tests for /api/v1/routes."""

    def test_route_options(self, client, mock_maps_repository, route_data):
        mock_maps_repository.get_route_options = AsyncMock(return_value=RouteOptions(with_tolls=route_data))

        response = client.get("/api/v1/routes/bandung-jakarta/options")

        assert response.status_code == 200
        assert response.json()["with_tolls"]["distance_km"] == 151.23
        assert response.json()["without_tolls"] is None

    def test_route_options_unknown_route(self, client):
        assert client.get("/api/v1/routes/nowhere/options").status_code == 404

    def test_route_options_unavailable(self, client, mock_maps_repository):
        mock_maps_repository.get_route_options = AsyncMock(side_effect=DirectionsError("no key"))

        assert client.get("/api/v1/routes/bandung-jakarta/options").status_code == 503


class TestWeatherEndpoints:
    """Tests for /api/v1/weather."""

    def test_current_weather(self, client):
        response = client.get("/api/v1/weather/32.73")

        assert response.status_code == 200
        data = response.json()
        assert data["provenance"] == "live"
        assert data["snapshot"]["condition"] == "Cerah"

    def test_forecast_days_validated(self, client):
        assert client.get("/api/v1/weather/32.73/forecast?days=8").status_code == 422

    def test_forecast(self, client, mock_weather_repository):
        forecast = mock_weather_repository.mock_generator.forecast("32.73", 2, date(2025, 1, 1))
        mock_weather_repository.get_forecast = AsyncMock(return_value=forecast)

        response = client.get("/api/v1/weather/32.73/forecast?days=2")

        assert response.status_code == 200
        assert len(response.json()["days"]) == 2
        mock_weather_repository.get_forecast.assert_awaited_once_with("32.73", days=2)

    def test_route_weather(self, client, mock_weather_repository):
        mock_weather_repository.get_route_weather = AsyncMock(return_value=RouteWeather())

        response = client.get("/api/v1/weather/route/bandung-jakarta")

        assert response.status_code == 200
        assert "summary" in response.json()

    def test_route_weather_unknown_route(self, client):
        assert client.get("/api/v1/weather/route/nowhere").status_code == 404
