import logging
from fastapi import APIRouter, Depends, HTTPException

from carbonroute.api.dependencies import get_emission_service
from carbonroute.core.exceptions import DirectionsError, InvalidInputError
from carbonroute.models.route import RouteOptions
from carbonroute.services.emission import EmissionService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{route_key}/options", response_model=RouteOptions)
async def get_route_options_api(
    route_key: str,
    emission_service: EmissionService = Depends(get_emission_service),
):
    """Road route with and without toll roads."""
    try:
        logger.info(f"Received route options request for '{route_key}'")
        return await emission_service.get_route_options(route_key)
    except InvalidInputError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DirectionsError as e:
        logger.error(f"Directions error for route '{route_key}': {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=f"Map service directions error: {e}")
