from typing import List, Optional
from datetime import datetime
import logging

from fpdf import FPDF

from carbonroute.core import constants
from carbonroute.models.emission import CalculationResult
from carbonroute.models.scenario import ScenarioParameters
from carbonroute.services.emission import EmissionService

logger = logging.getLogger(__name__)

TABLE_HEADERS = ["Transport mode", "Distance (km)", "Fuel / energy", "CO2 emission (kg)"]
COLUMN_WIDTHS = [60, 35, 45, 50]


class EmissionReport(FPDF):
    def header(self):
        self.set_font("Helvetica", "B", 16)
        self.cell(0, 10, "CARBON EMISSION SIMULATION REPORT", align="C", new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "", 12)
        self.cell(0, 7, "Bandung - Jakarta transport modes", align="C", new_x="LMARGIN", new_y="NEXT")
        self.line(10, 30, 200, 30)
        self.ln(8)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.cell(
            0, 5,
            f"Generated by carbonroute on {datetime.now().strftime('%Y-%m-%d %H:%M')} - page {self.page_no()}",
            align="C",
        )

    def section_title(self, label: str):
        self.set_font("Helvetica", "B", 12)
        self.cell(0, 8, label, new_x="LMARGIN", new_y="NEXT")

    def bullet(self, text: str):
        self.set_font("Helvetica", "", 11)
        self.cell(5)
        self.cell(0, 7, f"- {text}", new_x="LMARGIN", new_y="NEXT")

    def results_table(self, results: List[CalculationResult]):
        self.set_font("Helvetica", "B", 10)
        self.set_fill_color(41, 55, 72)
        self.set_text_color(255)
        for header, width in zip(TABLE_HEADERS, COLUMN_WIDTHS):
            self.cell(width, 8, header, border=1, align="C", fill=True)
        self.ln()

        self.set_font("Helvetica", "", 10)
        self.set_text_color(0)
        self.set_fill_color(247, 250, 252)
        for index, result in enumerate(results):
            fill = index % 2 == 1
            row = [
                constants.MODE_LABELS[result.mode],
                f"{result.distance_km:.2f}",
                f"{result.fuel_consumption:.3f} {result.fuel_unit}",
                f"{result.emission_kg:.3f}",
            ]
            for value, width in zip(row, COLUMN_WIDTHS):
                self.cell(width, 7, value, border=1, fill=fill)
            self.ln()


def scenario_lines(scenario: ScenarioParameters) -> List[str]:
    return [
        f"Traffic: {constants.TRAFFIC_LABELS[scenario.traffic]}",
        f"Weather: {constants.WEATHER_LABELS[scenario.weather]}",
        f"Load factor: {constants.LOAD_FACTOR_LABELS[scenario.load_factor]}",
        f"Energy source: {constants.ENERGY_LABELS[scenario.energy_source]}",
        f"Toll option: {constants.TOLL_LABELS[scenario.toll_option]}",
    ]


def generate_pdf_report(
    results: List[CalculationResult],
    route_key: str = "bandung-jakarta",
    distance_km: Optional[float] = None,
    scenario: Optional[ScenarioParameters] = None,
) -> bytes:
    """Render calculation results as a PDF document and return its bytes."""
    logger.info(f"Generating PDF report for {len(results)} result(s), route={route_key}")
    route_label = constants.ROUTES.get(route_key, {}).get("label", route_key)
    if distance_km is None and results:
        distance_km = results[0].distance_km

    pdf = EmissionReport()
    pdf.add_page()

    pdf.set_font("Helvetica", "", 12)
    pdf.cell(0, 7, f"Route: {route_label}", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 7, f"Date: {datetime.now().strftime('%d %B %Y')}", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 7, f"Distance: {distance_km or 0:.2f} km", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(3)

    if scenario is not None:
        pdf.section_title("Simulation scenario:")
        for line in scenario_lines(scenario):
            pdf.bullet(line)
        pdf.ln(3)

    pdf.section_title("Calculation results:")
    pdf.results_table(results)

    if results:
        summary = EmissionService.summarize(results)
        pdf.ln(6)
        pdf.section_title("Summary:")
        pdf.bullet(f"Total emission: {summary.total_emission_kg:.2f} kg CO2")
        pdf.bullet(f"Average emission: {summary.average_emission_kg:.2f} kg CO2")
        pdf.bullet(f"Lowest emission: {summary.min_emission_kg:.2f} kg CO2")
        pdf.bullet(f"Highest emission: {summary.max_emission_kg:.2f} kg CO2")

    return bytes(pdf.output())


def report_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"emission-report-{now.strftime('%Y-%m-%d')}.pdf"
