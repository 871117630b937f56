from typing import List, Optional, Tuple
from pydantic import BaseModel, Field
from carbonroute.models.location import Location


class RouteStep(BaseModel):
    distance_m: float = Field(..., description="Step distance in meters")
    duration_s: float = Field(..., description="Step duration in seconds")
    instructions: str = Field(default="", description="Plain-text driving instruction")
    end_location: Location


class RouteSummary(BaseModel):
    distance_km: float = Field(..., ge=0, description="Total distance in kilometers")
    duration_hours: float = Field(..., ge=0, description="Total duration in hours")
    warnings: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class RouteData(BaseModel):
    distance_km: float = Field(..., description="Distance in kilometers, 2 decimals")
    distance_text: str = ""
    duration_hours: float = Field(..., description="Duration in hours, 2 decimals")
    duration_text: str = ""
    start_address: str = ""
    end_address: str = ""
    steps: List[RouteStep] = Field(default_factory=list)
    polyline: str = Field(default="", description="Encoded overview polyline")
    path_points: List[Tuple[float, float]] = Field(default_factory=list)
    bounds: dict = Field(default_factory=dict, description="Northeast and southwest bounds of the route")
    warnings: List[str] = Field(default_factory=list)
    copyrights: str = ""
    avoid_tolls: bool = False

    def to_summary(self) -> RouteSummary:
        return RouteSummary(
            distance_km=self.distance_km,
            duration_hours=self.duration_hours,
            warnings=list(self.warnings),
        )


class RouteOptions(BaseModel):
    with_tolls: Optional[RouteData] = None
    without_tolls: Optional[RouteData] = None
    errors: List[str] = Field(default_factory=list)


class RouteAdjustments(BaseModel):
    traffic: float = 1.0
    urban: float = 1.0

    class Config:
        frozen = True

    @property
    def combined(self) -> float:
        return self.traffic * self.urban
