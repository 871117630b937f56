from typing import List, Optional
from pydantic import BaseModel, Field

from carbonroute.models.emission import CalculationResult
from carbonroute.models.scenario import EnergySource, ModeType, ScenarioParameters, TransportMode


# Request Models
class ReportRequest(BaseModel):
    route: str = Field("bandung-jakarta", description="Route key the results were computed for")
    results: List[CalculationResult] = Field(..., min_length=1)
    distance_km: Optional[float] = Field(None, ge=0, description="Distance shown in the report header")
    scenario: Optional[ScenarioParameters] = None


# Response Models
class TransportModeInfo(BaseModel):
    id: TransportMode
    label: str
    type: ModeType
    base_rate: float
    unit: str
    static_distance_km: Optional[float] = None


class AdjustmentFactorResponse(BaseModel):
    scenario: ScenarioParameters
    adjustment_factor: float
    emission_factor: float = Field(..., description="kg CO2 per unit for the scenario's energy source")
    energy_source: EnergySource
