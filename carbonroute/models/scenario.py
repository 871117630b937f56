from typing import Any, Dict
from enum import Enum
from pydantic import BaseModel, Field, ValidationError

from carbonroute.core.exceptions import InvalidInputError


class TransportMode(str, Enum):
    CAR = "car"
    BUS = "bus"
    MOTORCYCLE = "motorcycle"
    INTERCITY_RAIL = "intercity_rail"
    HIGH_SPEED_RAIL = "high_speed_rail"


class ModeType(str, Enum):
    ROAD = "road"
    RAIL = "rail"


class EnergySource(str, Enum):
    FOSSIL_FUEL = "fossil_fuel"
    GRID_ELECTRICITY = "grid_electricity"
    BIOFUEL = "biofuel"
    RENEWABLE_ELECTRICITY = "renewable_electricity"


class TrafficLevel(str, Enum):
    NORMAL = "normal"
    HEAVY = "heavy"
    VERY_HEAVY = "very_heavy"


class WeatherCondition(str, Enum):
    NORMAL = "normal"
    LIGHT_RAIN = "light_rain"
    HEAVY_RAIN = "heavy_rain"


class LoadFactor(str, Enum):
    STANDARD = "standard"
    PEAK = "peak"


class TollOption(str, Enum):
    WITH_TOLLS = "with_tolls"
    AVOID_TOLLS = "avoid_tolls"


class WeatherAdjustmentSource(str, Enum):
    """Which weather data drives the weather term of the adjustment factor."""
    SCENARIO = "scenario"
    LIVE = "live"


class ScenarioParameters(BaseModel):
    """What-if parameters applied on top of the base consumption rates."""

    traffic: TrafficLevel = Field(default=TrafficLevel.NORMAL, description="Traffic density")
    weather: WeatherCondition = Field(default=WeatherCondition.NORMAL, description="Selected weather condition")
    load_factor: LoadFactor = Field(default=LoadFactor.STANDARD, description="Passenger load factor")
    energy_source: EnergySource = Field(
        default=EnergySource.FOSSIL_FUEL, description="Energy source used for the emission factor"
    )
    toll_option: TollOption = Field(
        default=TollOption.WITH_TOLLS, description="Toll road preference (road modes only)"
    )

    class Config:
        frozen = True
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "traffic": "heavy",
                "weather": "light_rain",
                "load_factor": "peak",
                "energy_source": "fossil_fuel",
                "toll_option": "with_tolls",
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None = None) -> "ScenarioParameters":
        """Build parameters from untrusted input, raising InvalidInputError on bad values."""
        try:
            return cls(**(data or {}))
        except ValidationError as e:
            raise InvalidInputError(f"Invalid scenario parameters: {e}") from e

    @property
    def avoid_tolls(self) -> bool:
        return self.toll_option == TollOption.AVOID_TOLLS
