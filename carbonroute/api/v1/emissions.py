from typing import List
import logging
from fastapi import APIRouter, Depends, HTTPException, Response

from carbonroute.api.dependencies import get_emission_service
from carbonroute.api.v1.models import (
    AdjustmentFactorResponse,
    ReportRequest,
    TransportModeInfo,
)
from carbonroute.core import constants
from carbonroute.core.exceptions import ExternalSourceUnavailable, InvalidInputError
from carbonroute.models.emission import CalculationRequest, CalculationResponse
from carbonroute.models.scenario import ScenarioParameters
from carbonroute.reports.csv_export import export_csv
from carbonroute.reports.pdf import generate_pdf_report, report_filename
from carbonroute.services.calculations import resolve_adjustment_factor
from carbonroute.services.emission import EmissionService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/modes", response_model=List[TransportModeInfo])
async def list_transport_modes():
    """Transport modes with their base consumption rates."""
    return [
        TransportModeInfo(
            id=mode,
            label=constants.MODE_LABELS[mode],
            type=constants.MODE_TYPES[mode],
            base_rate=constants.CONSUMPTION_RATES[mode],
            unit="kWh/pkm" if mode.value == "high_speed_rail" else "L/km",
            static_distance_km=constants.STATIC_DISTANCES.get(mode),
        )
        for mode in constants.MODE_ORDER
    ]


@router.post("/adjustment-factor", response_model=AdjustmentFactorResponse)
async def preview_adjustment_factor(scenario: ScenarioParameters):
    """Preview the multiplier a scenario implies, before any distance is known."""
    return AdjustmentFactorResponse(
        scenario=scenario,
        adjustment_factor=resolve_adjustment_factor(scenario),
        emission_factor=constants.EMISSION_FACTORS[scenario.energy_source],
        energy_source=scenario.energy_source,
    )


@router.post("/calculate", response_model=CalculationResponse)
async def calculate_emissions(
    request: CalculationRequest,
    emission_service: EmissionService = Depends(get_emission_service),
):
    """Calculate fuel consumption and CO2 emission for one or all transport modes."""
    try:
        return await emission_service.calculate(request)
    except InvalidInputError as e:
        logger.warning(f"Invalid calculation request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except ExternalSourceUnavailable as e:
        logger.error(f"External source unavailable during calculation: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error calculating emissions: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error while calculating emissions.")


@router.post("/report/pdf")
async def download_pdf_report(request: ReportRequest):
    """Render results as a downloadable PDF report."""
    try:
        content = generate_pdf_report(
            request.results,
            route_key=request.route,
            distance_km=request.distance_km,
            scenario=request.scenario,
        )
    except Exception as e:
        logger.error(f"Failed to generate PDF report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate PDF report.")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename()}"'},
    )


@router.post("/report/csv")
async def download_csv_report(request: ReportRequest):
    """Export results as CSV."""
    return Response(
        content=export_csv(request.results),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="emission-results.csv"'},
    )
