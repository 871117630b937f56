class CarbonRouteError(Exception):
    """Base class for carbonroute errors."""
    pass


class InvalidInputError(CarbonRouteError, ValueError):
    """Input rejected before any calculation runs (bad distance, unknown enum value)."""
    pass


class ExternalSourceUnavailable(CarbonRouteError):
    """An external data source (routing, weather) could not be used."""
    pass


class DirectionsError(ExternalSourceUnavailable):
    """Error retrieving directions."""
    pass


class WeatherServiceError(ExternalSourceUnavailable):
    """Error retrieving weather data."""
    pass
