from unittest.mock import AsyncMock, MagicMock

import pytest

from carbonroute.models.route import RouteData
from carbonroute.models.weather import DataProvenance, WeatherReading, WeatherSnapshot
from carbonroute.repositories.weather.bmkg import MockWeatherGenerator


@pytest.fixture
def sample_directions_response():
    """Sample Google Directions response (client.directions return value)."""
    return [
        {
            "summary": "Jl. Tol Purbaleunyi",
            "bounds": {
                "northeast": {"lat": -6.17, "lng": 107.62},
                "southwest": {"lat": -6.92, "lng": 106.82},
            },
            "copyrights": "Map data ©2025",
            "warnings": ["Heavy traffic expected near Cikampek"],
            "overview_polyline": {"points": "_p~iF~ps|U_ulLnnqC_mqNvxq`@"},
            "legs": [
                {
                    "distance": {"value": 151234, "text": "151 km"},
                    "duration": {"value": 10800, "text": "3 hours"},
                    "start_address": "Bandung, West Java, Indonesia",
                    "end_address": "Jakarta, Indonesia",
                    "steps": [
                        {
                            "distance": {"value": 1200, "text": "1.2 km"},
                            "duration": {"value": 180, "text": "3 mins"},
                            "html_instructions": "Head <b>north</b> on <b>Jl. Asia Afrika</b>",
                            "end_location": {"lat": -6.91, "lng": 107.61},
                        },
                        {
                            "distance": {"value": 150034, "text": "150 km"},
                            "duration": {"value": 10620, "text": "2 hours 57 mins"},
                            "html_instructions": "Take the <b>Cipularang</b> toll road",
                            "end_location": {"lat": -6.17, "lng": 106.82},
                        },
                    ],
                }
            ],
        }
    ]


@pytest.fixture
def sample_bmkg_response():
    """Sample BMKG prakiraan-cuaca response."""
    return {
        "lokasi": {"adm4": "32.73", "kotkab": "Kota Bandung"},
        "data": [
            {
                "lokasi": {"adm4": "32.73"},
                "cuaca": [
                    [
                        {
                            "utc_datetime": "2025-01-01 00:00:00",
                            "local_datetime": "2025-01-01 07:00:00",
                            "t": 23,
                            "hu": 88,
                            "weather_desc": "Hujan Ringan",
                            "weather_desc_en": "Light Rain",
                            "ws": 6.4,
                            "wd": "SW",
                            "tcc": 92,
                            "vs_text": "< 9 km",
                        },
                        {
                            "utc_datetime": "2025-01-01 03:00:00",
                            "t": 27,
                            "hu": 70,
                            "weather_desc": "Berawan",
                            "weather_desc_en": "Mostly Cloudy",
                            "ws": 8.1,
                        },
                    ]
                ],
            }
        ],
    }


@pytest.fixture
def route_data():
    return RouteData(
        distance_km=151.23,
        duration_hours=3.0,
        start_address="Bandung, West Java, Indonesia",
        end_address="Jakarta, Indonesia",
        warnings=[],
    )


@pytest.fixture
def heavy_rain_snapshot():
    return WeatherSnapshot(
        temperature_c=40,
        humidity_pct=90,
        wind_speed_kmh=20,
        condition="heavy rain",
    )


@pytest.fixture
def clear_snapshot():
    return WeatherSnapshot(
        temperature_c=27,
        humidity_pct=70,
        wind_speed_kmh=5,
        condition="Cerah",
        condition_en="Clear",
    )


@pytest.fixture
def mock_maps_repository(route_data):
    repository = MagicMock()
    repository.get_directions = AsyncMock(return_value=route_data)
    return repository


@pytest.fixture
def mock_weather_repository(clear_snapshot):
    repository = MagicMock()
    repository.get_current_weather = AsyncMock(
        return_value=WeatherReading(region_code="32.73", snapshot=clear_snapshot, provenance=DataProvenance.LIVE)
    )
    repository.mock_generator = MockWeatherGenerator(seed=7)
    return repository
