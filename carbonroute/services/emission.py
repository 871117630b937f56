from typing import Dict, List, Optional, Tuple
import logging

from carbonroute.core import constants
from carbonroute.core.exceptions import ExternalSourceUnavailable, InvalidInputError
from carbonroute.models.emission import (
    CalculationMode,
    CalculationRequest,
    CalculationResponse,
    CalculationResult,
    DistanceResolution,
    DistanceSource,
    EmissionSummary,
)
from carbonroute.models.route import RouteOptions, RouteSummary
from carbonroute.models.scenario import ScenarioParameters, TransportMode, WeatherAdjustmentSource
from carbonroute.models.weather import Forecast, RouteWeather, WeatherReading
from carbonroute.repositories.maps.google_maps import GoogleMapsRepository
from carbonroute.repositories.weather.bmkg import BMKGWeatherRepository
from carbonroute.services.calculations import (
    QUANTITY_DECIMALS,
    EmissionEngine,
    estimate_route_adjustments,
    is_rail,
    parse_mode,
    round_half_up,
)

logger = logging.getLogger(__name__)


class EmissionService:
    """Resolves distances and weather from external sources, then runs the engine."""

    def __init__(
        self,
        maps_repository: GoogleMapsRepository,
        weather_repository: BMKGWeatherRepository,
        engine: Optional[EmissionEngine] = None,
        fallback_distance_km: float = 150.0,
    ):
        self.maps_repository = maps_repository
        self.weather_repository = weather_repository
        self.engine = engine or EmissionEngine()
        self.fallback_distance_km = fallback_distance_km

    def _get_route(self, route_key: str) -> Dict[str, object]:
        route = constants.ROUTES.get(route_key)
        if route is None:
            raise InvalidInputError(
                f"Unknown route: {route_key!r}. Supported routes are: {', '.join(constants.ROUTES)}"
            )
        return route

    async def resolve_distance(
        self,
        mode: TransportMode,
        route_key: str,
        scenario: ScenarioParameters,
    ) -> Tuple[DistanceResolution, Optional[RouteSummary]]:
        """Distance for one mode: static for rail, routing API with fallback for road."""
        mode = parse_mode(mode)
        route = self._get_route(route_key)

        if is_rail(mode):
            return DistanceResolution(
                mode=mode,
                distance_km=constants.STATIC_DISTANCES[mode],
                source=DistanceSource.STATIC,
            ), None

        try:
            route_data = await self.maps_repository.get_directions(
                origin=route["origin"],
                destination=route["destination"],
                avoid_tolls=scenario.avoid_tolls,
            )
        except ExternalSourceUnavailable as e:
            logger.warning(
                f"Route source unavailable for {route_key} ({mode.value}), "
                f"using fallback distance {self.fallback_distance_km}km: {e}"
            )
            return DistanceResolution(
                mode=mode,
                distance_km=self.fallback_distance_km,
                source=DistanceSource.FALLBACK,
            ), None

        summary = route_data.to_summary()
        return DistanceResolution(
            mode=mode,
            distance_km=summary.distance_km,
            source=DistanceSource.ROUTE_API,
            duration_hours=summary.duration_hours,
            warnings=summary.warnings,
        ), summary

    async def calculate(self, request: CalculationRequest) -> CalculationResponse:
        """Run an 'actual' (selected mode) or 'prediction' (all modes) calculation."""
        route = self._get_route(request.route)
        scenario = request.scenario
        logger.info(
            f"Calculating emissions: route={request.route}, mode={request.mode.value}, "
            f"calculation_mode={request.calculation_mode.value}, scenario={scenario.model_dump(mode='json')}"
        )

        if request.calculation_mode == CalculationMode.PREDICTION:
            modes = list(constants.MODE_ORDER)
        else:
            modes = [request.mode]

        weather: Optional[WeatherReading] = None
        if self.engine.weather_source == WeatherAdjustmentSource.LIVE:
            weather = await self.weather_repository.get_current_weather(route["origin_region"])
            if weather.is_mock:
                logger.warning(f"Live weather unavailable for {request.route}, applying mock weather")

        # All road modes share one route lookup
        road_resolution: Optional[Tuple[DistanceResolution, Optional[RouteSummary]]] = None
        results: List[CalculationResult] = []
        distances: Dict[TransportMode, DistanceResolution] = {}
        route_summary: Optional[RouteSummary] = None

        for mode in modes:
            if is_rail(mode):
                resolution, summary = await self.resolve_distance(mode, request.route, scenario)
            else:
                if road_resolution is None:
                    road_resolution = await self.resolve_distance(mode, request.route, scenario)
                resolution = road_resolution[0].model_copy(update={"mode": mode})
                summary = road_resolution[1]
                route_summary = summary

            distances[mode] = resolution
            results.append(
                self.engine.compute_one(
                    mode,
                    resolution.distance_km,
                    scenario,
                    weather=weather.snapshot if weather else None,
                    route=summary,
                )
            )

        route_adjustments = estimate_route_adjustments(route_summary) if route_summary else None
        response = CalculationResponse(
            route=request.route,
            calculation_mode=request.calculation_mode,
            results=results,
            distances=distances,
            summary=self.summarize(results),
            weather=weather,
            route_adjustments=route_adjustments,
        )
        logger.info(f"Calculated {len(results)} result(s), total emission {response.summary.total_emission_kg}kg")
        return response

    @staticmethod
    def summarize(results: List[CalculationResult]) -> EmissionSummary:
        if not results:
            return EmissionSummary(
                total_emission_kg=0.0,
                average_emission_kg=0.0,
                min_emission_kg=0.0,
                max_emission_kg=0.0,
            )

        emissions = [result.emission_kg for result in results]
        lowest = min(results, key=lambda result: result.emission_kg)
        total = sum(emissions)
        return EmissionSummary(
            total_emission_kg=round_half_up(total, QUANTITY_DECIMALS),
            average_emission_kg=round_half_up(total / len(emissions), QUANTITY_DECIMALS),
            min_emission_kg=min(emissions),
            max_emission_kg=max(emissions),
            lowest_emission_mode=lowest.mode,
        )

    async def get_route_options(self, route_key: str) -> RouteOptions:
        route = self._get_route(route_key)
        return await self.maps_repository.get_route_options(route["origin"], route["destination"])

    async def get_weather(self, region_code: str) -> WeatherReading:
        return await self.weather_repository.get_current_weather(region_code)

    async def get_forecast(self, region_code: str, days: int = 3) -> Forecast:
        return await self.weather_repository.get_forecast(region_code, days=days)

    async def get_route_weather(self, route_key: str) -> RouteWeather:
        route = self._get_route(route_key)
        return await self.weather_repository.get_route_weather(list(route["regions"]))
