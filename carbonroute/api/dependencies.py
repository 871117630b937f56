from functools import lru_cache
from fastapi import Depends

from carbonroute.core.settings import get_settings
from carbonroute.repositories.maps.google_maps import GoogleMapsRepository
from carbonroute.repositories.weather.bmkg import BMKGWeatherRepository, MockWeatherGenerator
from carbonroute.services.calculations import EmissionEngine
from carbonroute.services.emission import EmissionService


@lru_cache()
def get_maps_repository() -> GoogleMapsRepository:
    """Get GoogleMapsRepository instance."""
    settings = get_settings()
    return GoogleMapsRepository(
        api_key=settings.GOOGLE_MAPS_API_KEY,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )


@lru_cache()
def get_weather_repository() -> BMKGWeatherRepository:
    """Get BMKGWeatherRepository instance."""
    settings = get_settings()
    return BMKGWeatherRepository(
        base_url=settings.BMKG_BASE_URL,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        max_attempts=settings.FETCH_MAX_ATTEMPTS,
        mock_generator=MockWeatherGenerator(seed=settings.MOCK_WEATHER_SEED),
    )


@lru_cache()
def get_emission_engine() -> EmissionEngine:
    settings = get_settings()
    return EmissionEngine(
        weather_source=settings.WEATHER_ADJUSTMENT_SOURCE,
        apply_route_adjustment=settings.APPLY_ROUTE_ADJUSTMENT,
    )


def get_emission_service(
    maps_repository: GoogleMapsRepository = Depends(get_maps_repository),
    weather_repository: BMKGWeatherRepository = Depends(get_weather_repository),
    engine: EmissionEngine = Depends(get_emission_engine),
) -> EmissionService:
    """Get EmissionService instance."""
    return EmissionService(
        maps_repository=maps_repository,
        weather_repository=weather_repository,
        engine=engine,
        fallback_distance_km=get_settings().FALLBACK_DISTANCE_KM,
    )
