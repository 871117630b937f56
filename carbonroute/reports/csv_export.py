from typing import List
import csv
import io

from carbonroute.core.constants import MODE_LABELS
from carbonroute.models.emission import CalculationResult

CSV_COLUMNS = [
    "mode",
    "label",
    "distance_km",
    "fuel_consumption",
    "fuel_unit",
    "emission_kg",
    "energy_source",
    "adjustment_factor",
    "traffic",
    "weather",
    "load_factor",
    "toll_option",
]


def export_csv(results: List[CalculationResult]) -> str:
    """One row per calculation result, header included."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for result in results:
        writer.writerow({
            "mode": result.mode.value,
            "label": MODE_LABELS[result.mode],
            "distance_km": f"{result.distance_km:.2f}",
            "fuel_consumption": f"{result.fuel_consumption:.3f}",
            "fuel_unit": result.fuel_unit,
            "emission_kg": f"{result.emission_kg:.3f}",
            "energy_source": result.energy_source.value,
            "adjustment_factor": result.adjustment_factor,
            "traffic": result.scenario.traffic.value,
            "weather": result.scenario.weather.value,
            "load_factor": result.scenario.load_factor.value,
            "toll_option": result.scenario.toll_option.value,
        })
    return buffer.getvalue()
