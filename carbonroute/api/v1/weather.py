import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from carbonroute.api.dependencies import get_emission_service
from carbonroute.core.exceptions import InvalidInputError
from carbonroute.models.weather import Forecast, RouteWeather, WeatherReading
from carbonroute.services.emission import EmissionService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/route/{route_key}", response_model=RouteWeather)
async def get_route_weather_api(
    route_key: str,
    emission_service: EmissionService = Depends(get_emission_service),
):
    """Weather for each region along a route plus an aggregate summary."""
    try:
        return await emission_service.get_route_weather(route_key)
    except InvalidInputError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{region_code}", response_model=WeatherReading)
async def get_current_weather_api(
    region_code: str,
    emission_service: EmissionService = Depends(get_emission_service),
):
    """Current weather for a BMKG region code (mock data when BMKG is unreachable)."""
    logger.info(f"Received weather request for region '{region_code}'")
    return await emission_service.get_weather(region_code)


@router.get("/{region_code}/forecast", response_model=Forecast)
async def get_forecast_api(
    region_code: str,
    days: int = Query(3, ge=1, le=7, description="Number of days to forecast"),
    emission_service: EmissionService = Depends(get_emission_service),
):
    """Daily forecast for a BMKG region code."""
    return await emission_service.get_forecast(region_code, days=days)
