"""Emission calculation and scenario adjustment engine.

Every function here is pure: no I/O, no randomness. Unknown modes or
energy sources are rejected with InvalidInputError instead of being
silently mapped to a zero rate.
"""
from typing import List, Optional
from decimal import Decimal, ROUND_HALF_UP
import math
import logging

from carbonroute.core import constants
from carbonroute.core.exceptions import InvalidInputError
from carbonroute.models.emission import CalculationResult
from carbonroute.models.route import RouteAdjustments, RouteSummary
from carbonroute.models.scenario import (
    EnergySource,
    ModeType,
    ScenarioParameters,
    TransportMode,
    WeatherAdjustmentSource,
)
from carbonroute.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

DISTANCE_DECIMALS = 2
QUANTITY_DECIMALS = 3
FACTOR_DECIMALS = 5


def round_half_up(value: float, decimals: int) -> float:
    """Round using ROUND_HALF_UP on the shortest repr of the float (2.675 -> 2.68)."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def parse_mode(mode) -> TransportMode:
    try:
        return TransportMode(mode)
    except ValueError as e:
        raise InvalidInputError(f"Unknown transport mode: {mode!r}") from e


def parse_energy_source(energy_source) -> EnergySource:
    try:
        return EnergySource(energy_source)
    except ValueError as e:
        raise InvalidInputError(f"Unknown energy source: {energy_source!r}") from e


def _validate_distance(distance_km: float) -> float:
    try:
        distance = float(distance_km)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Distance must be a number, got {distance_km!r}") from e
    if not math.isfinite(distance) or distance < 0:
        raise InvalidInputError(f"Distance must be a non-negative finite number, got {distance_km!r}")
    return distance


def is_rail(mode: TransportMode) -> bool:
    return constants.MODE_TYPES[parse_mode(mode)] == ModeType.RAIL


def resolve_adjustment_factor(params: Optional[ScenarioParameters] = None, include_weather: bool = True) -> float:
    """Combine traffic, weather and load factor into one multiplier (1.0 = no adjustment)."""
    params = params or ScenarioParameters()
    factor = 1.0
    factor *= constants.TRAFFIC_FACTORS.get(params.traffic, 1.0)
    if include_weather:
        factor *= constants.WEATHER_FACTORS.get(params.weather, 1.0)
    factor *= constants.LOAD_FACTORS.get(params.load_factor, 1.0)
    return factor


def calculate_fuel_consumption(mode, distance_km: float, adjustment_factor: float = 1.0) -> float:
    """Fuel (or energy) consumed: base rate x distance x adjustment factor."""
    mode = parse_mode(mode)
    distance = _validate_distance(distance_km)
    if not math.isfinite(adjustment_factor) or adjustment_factor < 0:
        raise InvalidInputError(f"Adjustment factor must be >= 0, got {adjustment_factor!r}")
    return constants.CONSUMPTION_RATES[mode] * distance * adjustment_factor


def calculate_emission(fuel_consumption: float, energy_source=EnergySource.FOSSIL_FUEL) -> float:
    """CO2 in kg for the given consumption and energy source."""
    energy_source = parse_energy_source(energy_source)
    if fuel_consumption < 0:
        raise InvalidInputError(f"Fuel consumption must be >= 0, got {fuel_consumption!r}")
    return fuel_consumption * constants.EMISSION_FACTORS[energy_source]


def derive_from_weather(snapshot: Optional[WeatherSnapshot]) -> float:
    """Multiplier derived from observed weather conditions.

    Rain is matched as a case-insensitive substring of the free-text
    condition (English or BMKG Indonesian), light rain taking precedence.
    """
    if snapshot is None:
        return 1.0

    factor = 1.0
    condition = f"{snapshot.condition} {snapshot.condition_en}".lower()

    if any(keyword in condition for keyword in constants.LIGHT_RAIN_KEYWORDS):
        factor *= constants.LIGHT_RAIN_FACTOR
    elif any(keyword in condition for keyword in constants.HEAVY_RAIN_KEYWORDS):
        factor *= constants.HEAVY_RAIN_FACTOR

    temperature = snapshot.temperature_c
    if temperature < constants.MIN_COMFORT_TEMPERATURE_C or temperature > constants.MAX_COMFORT_TEMPERATURE_C:
        factor *= constants.EXTREME_TEMPERATURE_FACTOR

    if snapshot.wind_speed_kmh > constants.STRONG_WIND_KMH:
        factor *= constants.STRONG_WIND_FACTOR

    return factor


def estimate_route_adjustments(route: RouteSummary) -> RouteAdjustments:
    """Traffic and urban-terrain multipliers inferred from route metadata."""
    traffic = 1.0
    if any(
        keyword in warning.lower()
        for warning in route.warnings
        for keyword in constants.TRAFFIC_WARNING_KEYWORDS
    ):
        traffic = constants.TRAFFIC_WARNING_FACTOR

    urban = 1.0
    if route.duration_hours > 0:
        average_speed = route.distance_km / route.duration_hours
        if average_speed < constants.URBAN_SPEED_KMH:
            urban = constants.URBAN_FACTOR
        elif average_speed > constants.HIGHWAY_SPEED_KMH:
            urban = constants.HIGHWAY_FACTOR

    return RouteAdjustments(traffic=traffic, urban=urban)


def _build_result(
    mode: TransportMode,
    distance_km: float,
    scenario: ScenarioParameters,
    adjustment_factor: float,
) -> CalculationResult:
    fuel = calculate_fuel_consumption(mode, distance_km, adjustment_factor)
    emission = calculate_emission(fuel, scenario.energy_source)
    return CalculationResult(
        mode=mode,
        distance_km=round_half_up(distance_km, DISTANCE_DECIMALS),
        fuel_consumption=round_half_up(fuel, QUANTITY_DECIMALS),
        emission_kg=round_half_up(emission, QUANTITY_DECIMALS),
        energy_source=scenario.energy_source,
        scenario=scenario,
        adjustment_factor=round_half_up(adjustment_factor, FACTOR_DECIMALS),
    )


def compute_one(mode, distance_km: float, scenario: Optional[ScenarioParameters] = None) -> CalculationResult:
    """Compute the result record for a single mode using only scenario parameters."""
    scenario = scenario or ScenarioParameters()
    mode = parse_mode(mode)
    distance = _validate_distance(distance_km)
    return _build_result(mode, distance, scenario, resolve_adjustment_factor(scenario))


def compute_all(distance_km: float, scenario: Optional[ScenarioParameters] = None) -> List[CalculationResult]:
    """Compute one result per mode, in MODE_ORDER, over the same distance."""
    return [compute_one(mode, distance_km, scenario) for mode in constants.MODE_ORDER]


class EmissionEngine:
    """Orchestrator that decides which optional adjustment stages apply.

    weather_source picks exactly one weather path: the scenario's selected
    condition or the factor derived from a live snapshot. Route adjustments
    are applied to road modes only, and only when enabled.
    """

    def __init__(
        self,
        weather_source: WeatherAdjustmentSource = WeatherAdjustmentSource.SCENARIO,
        apply_route_adjustment: bool = False,
    ):
        try:
            self.weather_source = WeatherAdjustmentSource(weather_source)
        except ValueError as e:
            raise InvalidInputError(f"Unknown weather adjustment source: {weather_source!r}") from e
        self.apply_route_adjustment = apply_route_adjustment

    def adjustment_factor(
        self,
        mode,
        scenario: ScenarioParameters,
        weather: Optional[WeatherSnapshot] = None,
        route: Optional[RouteSummary] = None,
    ) -> float:
        mode = parse_mode(mode)
        if self.weather_source == WeatherAdjustmentSource.LIVE:
            factor = resolve_adjustment_factor(scenario, include_weather=False)
            factor *= derive_from_weather(weather)
        else:
            factor = resolve_adjustment_factor(scenario)

        if self.apply_route_adjustment and route is not None and not is_rail(mode):
            factor *= estimate_route_adjustments(route).combined
        return factor

    def compute_one(
        self,
        mode,
        distance_km: float,
        scenario: Optional[ScenarioParameters] = None,
        weather: Optional[WeatherSnapshot] = None,
        route: Optional[RouteSummary] = None,
    ) -> CalculationResult:
        scenario = scenario or ScenarioParameters()
        mode = parse_mode(mode)
        distance = _validate_distance(distance_km)
        factor = self.adjustment_factor(mode, scenario, weather=weather, route=route)
        logger.debug(
            f"Computing {mode.value}: distance={distance:.2f}km, factor={factor:.5f}, "
            f"weather_source={self.weather_source.value}"
        )
        return _build_result(mode, distance, scenario, factor)

    def compute_all(
        self,
        distance_km: float,
        scenario: Optional[ScenarioParameters] = None,
        weather: Optional[WeatherSnapshot] = None,
        route: Optional[RouteSummary] = None,
    ) -> List[CalculationResult]:
        return [
            self.compute_one(mode, distance_km, scenario, weather=weather, route=route)
            for mode in constants.MODE_ORDER
        ]
