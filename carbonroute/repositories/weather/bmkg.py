from typing import Any, Dict, List, Optional
from collections import Counter
from datetime import date, datetime, timedelta, timezone
import asyncio
import random
import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from carbonroute.core.constants import REGION_NAMES
from carbonroute.core.exceptions import WeatherServiceError
from carbonroute.models.weather import (
    DataProvenance,
    Forecast,
    ForecastDay,
    RegionWeather,
    RouteWeather,
    RouteWeatherSummary,
    WeatherReading,
    WeatherSnapshot,
)
import logging

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE_C = 25.0
DEFAULT_HUMIDITY_PCT = 70.0
DEFAULT_WIND_SPEED_KMH = 5.0
DEFAULT_CLOUD_COVER_PCT = 50.0

MOCK_CONDITIONS = {
    "cerah": "clear",
    "berawan": "cloudy",
    "hujan ringan": "light rain",
    "normal": "normal",
}
WIND_DIRECTIONS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]


def region_name(region_code: str) -> str:
    return REGION_NAMES.get(region_code, f"Region {region_code}")


def _to_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class MockWeatherGenerator:
    """Seeded stand-in for BMKG data; the same seed and region always give the same values."""

    def __init__(self, seed: int = 42):
        self.seed = seed

    def _rng(self, *parts: str) -> random.Random:
        return random.Random(":".join([str(self.seed), *parts]))

    def snapshot(self, region_code: str) -> WeatherSnapshot:
        rng = self._rng(region_code, "current")
        condition = rng.choice(list(MOCK_CONDITIONS))
        return WeatherSnapshot(
            temperature_c=round(22 + rng.random() * 8),     # 22-30 C
            humidity_pct=round(60 + rng.random() * 30),     # 60-90 %
            wind_speed_kmh=round(3 + rng.random() * 7),     # 3-10 km/h
            condition=condition,
            condition_en=MOCK_CONDITIONS[condition],
            wind_direction=rng.choice(WIND_DIRECTIONS),
            cloud_cover_pct=round(20 + rng.random() * 60),  # 20-80 %
            visibility="10 km",
        )

    def reading(self, region_code: str) -> WeatherReading:
        return WeatherReading(
            region_code=region_code,
            snapshot=self.snapshot(region_code),
            provenance=DataProvenance.MOCK,
        )

    def forecast(self, region_code: str, days: int, start: date) -> Forecast:
        rng = self._rng(region_code, "forecast", start.isoformat())
        forecast_days = []
        for offset in range(1, days + 1):
            condition = rng.choice(list(MOCK_CONDITIONS))
            forecast_days.append(
                ForecastDay(
                    day=start + timedelta(days=offset),
                    temperature_c=round(22 + rng.random() * 8),
                    humidity_pct=round(60 + rng.random() * 30),
                    wind_speed_kmh=round(3 + rng.random() * 7),
                    cloud_cover_pct=round(20 + rng.random() * 60),
                    condition=condition,
                    condition_en=MOCK_CONDITIONS[condition],
                )
            )
        return Forecast(region_code=region_code, days=forecast_days, provenance=DataProvenance.MOCK)

    def vary_forecast(self, current: WeatherSnapshot, region_code: str, days: int, start: date) -> List[ForecastDay]:
        """Project a live snapshot forward with bounded seeded variation."""
        rng = self._rng(region_code, "projection", start.isoformat())
        forecast_days = []
        for offset in range(1, days + 1):
            forecast_days.append(
                ForecastDay(
                    day=start + timedelta(days=offset),
                    temperature_c=round(current.temperature_c + (rng.random() - 0.5) * 6),
                    humidity_pct=max(30, min(90, round(current.humidity_pct + (rng.random() - 0.5) * 20))),
                    wind_speed_kmh=max(0.0, current.wind_speed_kmh + (rng.random() - 0.5) * 4),
                    cloud_cover_pct=max(
                        0.0,
                        min(100.0, (current.cloud_cover_pct or DEFAULT_CLOUD_COVER_PCT) + (rng.random() - 0.5) * 40),
                    ),
                    condition=current.condition,
                    condition_en=current.condition_en,
                )
            )
        return forecast_days


class BMKGWeatherRepository:
    """Repository for the BMKG public weather forecast API."""

    def __init__(
        self,
        base_url: str = "https://api.bmkg.go.id/publik/prakiraan-cuaca",
        timeout: float = 10.0,
        max_attempts: int = 3,
        mock_generator: Optional[MockWeatherGenerator] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.mock_generator = mock_generator or MockWeatherGenerator()

    async def fetch_raw(self, region_code: str) -> Dict[str, Any]:
        """Fetch the raw BMKG payload, retrying transport failures."""
        if not region_code:
            raise WeatherServiceError("Region code is required")

        params = {"adm4": region_code}
        headers = {"Accept": "application/json", "User-Agent": "carbonroute/1.0"}

        logger.info(f"Fetching weather data for region={region_code}")
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=4),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    async with httpx.AsyncClient(timeout=self.timeout) as client:
                        response = await client.get(self.base_url, params=params, headers=headers)
                        response.raise_for_status()
                        data = response.json()
        except httpx.HTTPError as e:
            raise WeatherServiceError(f"BMKG request failed for region {region_code}: {e}") from e
        except ValueError as e:
            raise WeatherServiceError(f"BMKG returned invalid JSON for region {region_code}: {e}") from e

        if isinstance(data, dict) and (data.get("error") or data.get("statusCode") == 404):
            raise WeatherServiceError(data.get("message") or f"No weather data for region {region_code}")
        return data

    def parse_weather_data(self, data: Any) -> WeatherSnapshot:
        """Parse the first forecast entry of a BMKG payload into a snapshot."""
        entries = data
        if isinstance(data, dict):
            if "data" in data:
                entries = data["data"]
            elif "weather" in data:
                entries = data["weather"]
            else:
                entries = [data] if data else []
        if not isinstance(entries, list):
            entries = [entries]
        if not entries:
            raise WeatherServiceError("BMKG returned no forecast entries")

        current = entries[0]
        # Current BMKG format nests forecasts as data[0]["cuaca"][day][slot]
        if isinstance(current, dict) and "cuaca" in current:
            cuaca = current["cuaca"]
            if not isinstance(cuaca, list) or not cuaca:
                raise WeatherServiceError("Unrecognised BMKG payload")
            current = cuaca[0]
            if isinstance(current, list):
                if not current:
                    raise WeatherServiceError("Unrecognised BMKG payload")
                current = current[0]
        if not isinstance(current, dict):
            raise WeatherServiceError("Unrecognised BMKG payload")

        return WeatherSnapshot(
            temperature_c=_to_float(current.get("t"), DEFAULT_TEMPERATURE_C),
            humidity_pct=_to_float(current.get("hu"), DEFAULT_HUMIDITY_PCT),
            wind_speed_kmh=_to_float(current.get("ws"), DEFAULT_WIND_SPEED_KMH),
            condition=current.get("weather_desc") or current.get("weather_desc_en") or "normal",
            condition_en=current.get("weather_desc_en") or "normal",
            wind_direction=current.get("wd") or "N",
            cloud_cover_pct=_to_float(current.get("tcc"), DEFAULT_CLOUD_COVER_PCT),
            visibility=current.get("vs_text") or "10 km",
            observed_at=current.get("utc_datetime") or current.get("local_datetime"),
        )

    async def get_current_weather(self, region_code: str) -> WeatherReading:
        """Current weather for a region; falls back to seeded mock data on any fetch failure."""
        try:
            data = await self.fetch_raw(region_code)
            snapshot = self.parse_weather_data(data)
        except WeatherServiceError as e:
            logger.warning(f"Using mock weather for region={region_code}: {e}")
            return self.mock_generator.reading(region_code)
        except ValueError as e:
            # pydantic rejected the parsed values
            logger.warning(f"Using mock weather for region={region_code}, invalid BMKG values: {e}")
            return self.mock_generator.reading(region_code)

        logger.info(f"Weather data retrieved for region={region_code}: {snapshot.condition}, {snapshot.temperature_c}C")
        return WeatherReading(region_code=region_code, snapshot=snapshot, provenance=DataProvenance.LIVE)

    async def get_forecast(self, region_code: str, days: int = 3, start: Optional[date] = None) -> Forecast:
        """Forecast for the next `days` days, projected from current conditions."""
        start = start or datetime.now(timezone.utc).date()
        logger.info(f"Fetching {days}-day forecast for region={region_code}")
        current = await self.get_current_weather(region_code)
        if current.is_mock:
            return self.mock_generator.forecast(region_code, days, start)
        return Forecast(
            region_code=region_code,
            days=self.mock_generator.vary_forecast(current.snapshot, region_code, days, start),
            provenance=DataProvenance.LIVE,
        )

    async def get_route_weather(self, region_codes: List[str]) -> RouteWeather:
        """Weather for every region along a route, fetched concurrently."""
        logger.info(f"Fetching weather data for route regions: {region_codes}")
        results = await asyncio.gather(
            *(self.get_current_weather(code) for code in region_codes),
            return_exceptions=True,
        )

        regions = []
        for code, result in zip(region_codes, results):
            if isinstance(result, Exception):
                logger.error(f"Weather lookup for region={code} failed: {result}")
                result = self.mock_generator.reading(code)
            regions.append(RegionWeather(region_code=code, region_name=region_name(code), reading=result))

        return RouteWeather(regions=regions, summary=self._summarize(regions))

    def _summarize(self, regions: List[RegionWeather]) -> RouteWeatherSummary:
        if not regions:
            return RouteWeatherSummary()

        snapshots = [region.reading.snapshot for region in regions]
        conditions = [snapshot.condition for snapshot in snapshots]
        return RouteWeatherSummary(
            average_temperature_c=round(sum(s.temperature_c for s in snapshots) / len(snapshots)),
            average_humidity_pct=round(sum(s.humidity_pct for s in snapshots) / len(snapshots)),
            dominant_condition=Counter(conditions).most_common(1)[0][0],
            has_rain=any("hujan" in c.lower() or "rain" in c.lower() for c in conditions),
        )
