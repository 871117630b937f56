from typing import Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, Field, computed_field

from carbonroute.models.scenario import EnergySource, ScenarioParameters, TransportMode
from carbonroute.models.route import RouteAdjustments
from carbonroute.models.weather import WeatherReading


class CalculationMode(str, Enum):
    ACTUAL = "actual"          # single selected mode
    PREDICTION = "prediction"  # every mode, for comparison


class DistanceSource(str, Enum):
    ROUTE_API = "route_api"
    STATIC = "static"
    FALLBACK = "fallback"


class CalculationResult(BaseModel):
    mode: TransportMode
    distance_km: float = Field(..., ge=0, description="Distance in kilometers, 2 decimals")
    fuel_consumption: float = Field(..., ge=0, description="Liters (kWh for high-speed rail), 3 decimals")
    emission_kg: float = Field(..., ge=0, description="kg CO2, 3 decimals")
    energy_source: EnergySource
    scenario: ScenarioParameters
    adjustment_factor: float = Field(1.0, ge=0, description="Combined multiplier applied to the base rate")

    class Config:
        frozen = True

    @computed_field
    @property
    def fuel_unit(self) -> str:
        return "kWh" if self.mode == TransportMode.HIGH_SPEED_RAIL else "L"


class DistanceResolution(BaseModel):
    mode: TransportMode
    distance_km: float = Field(..., ge=0)
    source: DistanceSource
    duration_hours: Optional[float] = None
    warnings: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class EmissionSummary(BaseModel):
    total_emission_kg: float
    average_emission_kg: float
    min_emission_kg: float
    max_emission_kg: float
    lowest_emission_mode: Optional[TransportMode] = None


class CalculationRequest(BaseModel):
    route: str = Field("bandung-jakarta", description="Route key, e.g. 'bandung-jakarta'")
    mode: TransportMode = Field(..., description="Selected transport mode")
    calculation_mode: CalculationMode = Field(
        CalculationMode.ACTUAL, description="'actual' for the selected mode, 'prediction' for all modes"
    )
    scenario: ScenarioParameters = Field(default_factory=ScenarioParameters)

    class Config:
        json_schema_extra = {
            "example": {
                "route": "bandung-jakarta",
                "mode": "car",
                "calculation_mode": "prediction",
                "scenario": {"traffic": "heavy", "weather": "light_rain", "energy_source": "biofuel"},
            }
        }


class CalculationResponse(BaseModel):
    route: str
    calculation_mode: CalculationMode
    results: List[CalculationResult]
    distances: Dict[TransportMode, DistanceResolution] = Field(default_factory=dict)
    summary: EmissionSummary
    weather: Optional[WeatherReading] = None
    route_adjustments: Optional[RouteAdjustments] = None
