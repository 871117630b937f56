from typing import List, Optional
from datetime import date
from enum import Enum
from pydantic import BaseModel, Field


class DataProvenance(str, Enum):
    LIVE = "live"
    MOCK = "mock"


class WeatherSnapshot(BaseModel):
    temperature_c: float
    humidity_pct: float = Field(..., ge=0, le=100)
    wind_speed_kmh: float = Field(..., ge=0)
    condition: str = "normal"
    condition_en: str = "normal"
    wind_direction: str = "N"
    cloud_cover_pct: Optional[float] = None
    visibility: Optional[str] = None
    observed_at: Optional[str] = None

    class Config:
        frozen = True


class WeatherReading(BaseModel):
    """A snapshot tagged with where it came from."""

    region_code: str
    snapshot: WeatherSnapshot
    provenance: DataProvenance = DataProvenance.LIVE

    class Config:
        frozen = True

    @property
    def is_mock(self) -> bool:
        return self.provenance == DataProvenance.MOCK


class ForecastDay(BaseModel):
    day: date
    temperature_c: float
    humidity_pct: float
    wind_speed_kmh: float
    cloud_cover_pct: Optional[float] = None
    condition: str = "normal"
    condition_en: str = "normal"


class Forecast(BaseModel):
    region_code: str
    days: List[ForecastDay]
    provenance: DataProvenance = DataProvenance.LIVE


class RegionWeather(BaseModel):
    region_code: str
    region_name: str
    reading: WeatherReading


class RouteWeatherSummary(BaseModel):
    average_temperature_c: float = 0
    average_humidity_pct: float = 0
    dominant_condition: str = "normal"
    has_rain: bool = False


class RouteWeather(BaseModel):
    regions: List[RegionWeather] = Field(default_factory=list)
    summary: RouteWeatherSummary = Field(default_factory=RouteWeatherSummary)
