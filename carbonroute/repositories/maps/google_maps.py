from typing import Optional
import asyncio
import re
import googlemaps
import googlemaps.exceptions
import polyline
from carbonroute.core.exceptions import DirectionsError
from carbonroute.models.location import Location
from carbonroute.models.route import RouteData, RouteOptions, RouteStep
import logging

logger = logging.getLogger(__name__)

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")


class GoogleMapsRepository:
    def __init__(self, api_key: Optional[str], timeout: float = 10.0):
        """Initialize Google Maps client. Without a key every lookup raises DirectionsError."""
        self.client = None
        if api_key:
            logger.info("Initializing Google Maps client")
            self.client = googlemaps.Client(key=api_key, timeout=timeout)
        else:
            logger.warning("GOOGLE_MAPS_API_KEY is not set; road distances will use the fallback table")

    async def get_directions(
        self,
        origin: str,
        destination: str,
        avoid_tolls: bool = False,
    ) -> RouteData:
        """Get the driving route between two addresses."""
        if self.client is None:
            raise DirectionsError("Google Maps API key is not configured")

        logger.info(
            f"Attempting to get directions from origin='{origin}' to destination='{destination}', "
            f"avoid_tolls={avoid_tolls}"
        )
        try:
            # googlemaps is synchronous; keep the event loop free
            directions_result = await asyncio.to_thread(
                self.client.directions,
                origin=origin,
                destination=destination,
                mode="driving",
                avoid="tolls" if avoid_tolls else None,
                units="metric",
            )
        except googlemaps.exceptions.ApiError as e:
            logger.error(
                f"Google Maps API error while getting directions for origin='{origin}', destination='{destination}': {e}",
                exc_info=True,
            )
            raise DirectionsError(f"API error while getting directions: {e}") from e
        except (googlemaps.exceptions.TransportError, googlemaps.exceptions.Timeout) as e:
            logger.error(f"Network error while getting directions: {e}", exc_info=True)
            raise DirectionsError(f"Network error while getting directions: {e}") from e

        if not directions_result:
            logger.warning(f"No route found for origin='{origin}', destination='{destination}'")
            raise DirectionsError(f"No route found between {origin} and {destination}")

        try:
            route_data = self._parse_route(directions_result[0], avoid_tolls)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Malformed directions response: {e}", exc_info=True)
            raise DirectionsError(f"Malformed directions response: {e}") from e

        logger.info(
            f"Successfully found route for origin='{origin}', destination='{destination}': "
            f"distance={route_data.distance_km:.2f}km, duration={route_data.duration_hours:.2f}h"
        )
        return route_data

    async def get_route_options(self, origin: str, destination: str) -> RouteOptions:
        """Fetch the toll and toll-free routes concurrently; fail only if both fail."""
        logger.info(f"Fetching route options for origin='{origin}', destination='{destination}'")
        with_tolls, without_tolls = await asyncio.gather(
            self.get_directions(origin, destination, avoid_tolls=False),
            self.get_directions(origin, destination, avoid_tolls=True),
            return_exceptions=True,
        )

        options = RouteOptions()
        errors = []
        if isinstance(with_tolls, Exception):
            errors.append(f"with_tolls: {with_tolls}")
        else:
            options.with_tolls = with_tolls
        if isinstance(without_tolls, Exception):
            errors.append(f"without_tolls: {without_tolls}")
        else:
            options.without_tolls = without_tolls
        options.errors = errors

        if options.with_tolls is None and options.without_tolls is None:
            raise DirectionsError(f"Could not retrieve any route option: {'; '.join(errors)}")
        return options

    def _parse_route(self, route: dict, avoid_tolls: bool) -> RouteData:
        leg = route["legs"][0]
        distance_m = float(leg["distance"]["value"])
        duration_s = float(leg["duration"]["value"])

        steps = [
            RouteStep(
                distance_m=float(step["distance"]["value"]),
                duration_s=float(step["duration"]["value"]),
                instructions=HTML_TAG_PATTERN.sub("", step.get("html_instructions", "")),
                end_location=Location(
                    latitude=step["end_location"]["lat"],
                    longitude=step["end_location"]["lng"],
                ),
            )
            for step in leg.get("steps", [])
        ]

        overview = route.get("overview_polyline", {}).get("points", "")
        return RouteData(
            distance_km=round(distance_m / 1000, 2),
            distance_text=leg["distance"].get("text", ""),
            duration_hours=round(duration_s / 3600, 2),
            duration_text=leg["duration"].get("text", ""),
            start_address=leg.get("start_address", ""),
            end_address=leg.get("end_address", ""),
            steps=steps,
            polyline=overview,
            path_points=polyline.decode(overview) if overview else [],
            bounds=route.get("bounds", {}),
            warnings=route.get("warnings", []),
            copyrights=route.get("copyrights", ""),
            avoid_tolls=avoid_tolls,
        )
