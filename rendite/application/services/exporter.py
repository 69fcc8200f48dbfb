"""Export services for projection results.

Writes JSON snapshots, CSV schedules and the paginated PDF report, and
builds the KPI/assumption tables and the plain-text summary used by
document and clipboard export.
"""

from __future__ import annotations

import json
import os
from datetime import datetime
from io import BytesIO
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from rendite.core.exceptions import ExportError
from rendite.core.formatting import format_euro, format_pct, format_ratio
from rendite.core.logging import get_logger
from rendite.core.settings import get_settings
from rendite.domain.models.parameters import ParameterSet
from rendite.domain.models.results import COLUMN_LABELS, ResultsSummary

log = get_logger(__name__)

DISCLAIMER = "Alle Angaben ohne Gewähr."

# Schedule layouts shared by the UI tables and the PDF report
SCHEDULE_COLUMNS: dict[str, list[str]] = {
    "cashflow": ["year", "net_rent", "ops", "tax", "cf_before_tax", "cf_after_tax", "net_wealth"],
    "amortization": ["year", "annuity", "interest", "principal", "remaining_loan"],
}


def kpi_rows(results: ResultsSummary) -> list[tuple[str, str]]:
    """Headline KPIs as (label, formatted value) pairs."""
    return [
        ("Brutto-Rendite", format_ratio(results.brutto_yield, 2)),
        ("Cashflow p.M. (Jahr 1)", format_euro(results.monthly_cf1)),
        ("Eigenkapital eingesetzt", format_euro(results.equity)),
        ("EK-Rendite gesamt", format_ratio(results.coc_return, 1)),
        ("Marktwert (Ende)", format_euro(results.market_value_end)),
        ("Restschuld (Ende)", format_euro(results.remaining_loan_end)),
        ("Kumul. Cashflow (Ende)", format_euro(results.cumulated_cash_end)),
        ("Gesamtgewinn", format_euro(results.total_profit)),
    ]


def assumption_rows(
    params: ParameterSet,
    results: ResultsSummary,
    level: str = "simple",
) -> list[tuple[str, str]]:
    """Calculation assumptions as (label, formatted value) pairs.

    Tax, land share and growth assumptions are listed at level "pro" only.
    The results are the same at both levels.
    """
    acq = params.acquisition
    ops = params.rent_ops
    fin = params.financing

    rows = [("Kaufpreis Immobilie", format_euro(acq.price_property))]
    if acq.price_furniture > 0:
        rows.append(("Möbel/Einrichtung", format_euro(acq.price_furniture)))
    rows += [
        ("Kaufnebenkosten", format_euro(results.ancillary_costs)),
        ("Gesamtkosten", format_euro(results.total_costs)),
        ("Eigenkapital", format_euro(fin.equity_amount)),
        ("Darlehen", format_euro(results.loan0)),
        ("Kaltmiete/Monat", format_euro(ops.cold_rent_monthly)),
        ("Leerstand", format_pct(ops.vacancy_pct)),
        ("Verwaltung p.a.", format_euro(ops.mgmt_monthly * 12)),
        ("Instandhaltung p.a.", format_euro(ops.capex_monthly * 12)),
        ("Sollzins p.a.", format_pct(fin.interest_pct, 2)),
        ("Anfangstilgung p.a.", format_pct(fin.initial_redemption_pct, 2)),
        ("Planungshorizont", f"{params.settings.horizon_years} Jahre"),
    ]

    if level == "pro":
        afa_base = acq.price_property * (1 - acq.land_share_pct / 100)
        rows += [
            ("Grenzsteuersatz", format_pct(params.tax.marginal_rate_pct)),
            ("AfA-Basis (Gebäudewert)", format_euro(afa_base)),
            ("AfA-Satz p.a.", format_pct(params.tax.depreciation_pct)),
            ("Bodenanteil", format_pct(acq.land_share_pct, 0)),
            ("Mietsteigerung p.a.", format_pct(ops.rent_growth_pct)),
            ("Wertsteigerung p.a.", format_pct(ops.value_growth_pct)),
        ]
    return rows


def summary_text(
    params: ParameterSet,
    results: ResultsSummary,
    level: str = "simple",
) -> str:
    """Plain-text summary for the clipboard."""
    kpis = dict(kpi_rows(results))
    assumptions = dict(assumption_rows(params, results, level))

    lines = [
        "Rendite-Kalkulator Immobilien-Analyse",
        "=====================================",
        "",
        "KENNZAHLEN:",
    ]
    lines += [
        f"- {label}: {kpis[label]}"
        for label in ("Brutto-Rendite", "Cashflow p.M. (Jahr 1)", "Eigenkapital eingesetzt", "EK-Rendite gesamt")
    ]
    lines += ["", "ANNAHMEN:"]
    lines += [f"- {label}: {value}" for label, value in assumptions.items()]
    lines += ["", DISCLAIMER]
    return "\n".join(lines)


def snapshot_payload(
    params: ParameterSet,
    results: ResultsSummary,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """JSON-ready snapshot of inputs, results and metadata."""
    return {
        "metadata": {
            "timestamp": datetime.now().isoformat(),
            "horizon_years": results.horizon_years,
            **(metadata or {}),
        },
        "inputs": params.to_payload(),
        "results": json.loads(results.model_dump_json(by_alias=True)),
    }


def schedule_rows(results: ResultsSummary, mode: str = "cashflow") -> list[list[str]]:
    """Schedule table with a header row, amounts formatted."""
    columns = SCHEDULE_COLUMNS[mode]
    table = [[COLUMN_LABELS[c] for c in columns]]
    for row in results.rows:
        table.append([str(row.year)] + [format_euro(getattr(row, c)) for c in columns[1:]])
    return table


def report_sections(
    params: ParameterSet,
    results: ResultsSummary,
    level: str = "simple",
) -> list[tuple[str, list[list[str]]]]:
    """Titled tables of the PDF report, header row first."""
    header = [["Parameter", "Wert"]]
    return [
        ("Kennzahlen & Ergebnisse", header + [list(r) for r in kpi_rows(results)]),
        ("Berechnungsannahmen", header + [list(r) for r in assumption_rows(params, results, level)]),
        ("Cashflow-Übersicht", schedule_rows(results, "cashflow")),
        ("Tilgungsplan", schedule_rows(results, "amortization")),
    ]


def _table(data: list[list[str]]) -> Table:
    table = Table(data, repeatRows=1, hAlign="LEFT")
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CC38A")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.HexColor("#F8F9FA"), colors.white]),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#E5E7EB")),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return table


def _page_footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(colors.HexColor("#6B7280"))
    canvas.drawCentredString(A4[0] / 2, 0.7 * cm, f"Seite {doc.page}")
    canvas.restoreState()


def render_pdf(
    params: ParameterSet,
    results: ResultsSummary,
    level: str = "simple",
) -> bytes:
    """Render the paginated A4 report.

    Contains the KPI and assumption tables (pro rows at level "pro" only)
    followed by the cash-flow and amortization schedules.

    Raises:
        ExportError: If the document cannot be laid out.
    """
    styles = getSampleStyleSheet()
    story: list[Any] = [
        Paragraph("Immobilien-Kalkulation", styles["Title"]),
        Paragraph(f"Erstellt: {datetime.now():%d.%m.%Y}", styles["Italic"]),
        Spacer(1, 0.4 * cm),
    ]

    for index, (title, data) in enumerate(report_sections(params, results, level)):
        # Schedules start on a fresh page
        if index == 2:
            story.append(PageBreak())
        story.append(Paragraph(title, styles["Heading2"]))
        story.append(_table(data))
        story.append(Spacer(1, 0.5 * cm))

    story.append(Paragraph(DISCLAIMER, styles["Italic"]))

    out = BytesIO()
    doc = SimpleDocTemplate(
        out,
        pagesize=A4,
        title="Immobilien-Kalkulation",
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
    )
    try:
        doc.build(story, onFirstPage=_page_footer, onLaterPages=_page_footer)
    except LayoutError as e:
        log.error("pdf_render_failed", error=str(e))
        raise ExportError("Cannot lay out PDF report") from e

    log.debug("pdf_rendered", level=level, rows=results.horizon_years)
    return out.getvalue()


class ResultExporter:
    """Handles exporting of projection results."""

    def __init__(self, output_dir: str | None = None):
        """Initialize exporter.

        Args:
            output_dir: Directory where results will be saved. Defaults to
                the ``RENDITE_EXPORT_DIR`` setting.
        """
        self.output_dir = output_dir or get_settings().export_dir
        self._ensure_dir()

    def _ensure_dir(self) -> None:
        """Ensure output directory exists."""
        if not os.path.exists(self.output_dir):
            try:
                os.makedirs(self.output_dir)
                log.info("created_output_directory", path=self.output_dir)
            except OSError as e:
                log.error("output_directory_creation_failed", error=str(e))
                raise ExportError(f"Cannot create {self.output_dir}") from e

    def _path(self, prefix: str, extension: str) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        return os.path.join(self.output_dir, f"{prefix}_{timestamp}.{extension}")

    def save_results(
        self,
        params: ParameterSet,
        results: ResultsSummary,
        prefix: str = "projection",
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Save inputs and results to a JSON file.

        Args:
            params: Inputs of the projection
            results: Projection output
            prefix: Filename prefix.
            metadata: Optional metadata to include in the file (e.g. level).

        Returns:
            Path to the saved file.
        """
        filepath = self._path(prefix, "json")

        payload = snapshot_payload(params, results, metadata)

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            log.error("results_save_failed", path=filepath, error=str(e))
            raise ExportError(f"Cannot write {filepath}") from e

        log.info("results_saved", path=filepath, rows=results.horizon_years)
        return filepath

    def save_schedule_csv(self, results: ResultsSummary, prefix: str = "schedule") -> str:
        """Save the yearly schedule as CSV.

        Returns:
            Path to the saved file.
        """
        filepath = self._path(prefix, "csv")
        try:
            results.to_dataframe().to_csv(filepath, index=False, encoding="utf-8")
        except OSError as e:
            log.error("schedule_save_failed", path=filepath, error=str(e))
            raise ExportError(f"Cannot write {filepath}") from e

        log.info("schedule_saved", path=filepath, rows=results.horizon_years)
        return filepath

    def save_pdf(
        self,
        params: ParameterSet,
        results: ResultsSummary,
        level: str = "simple",
        prefix: str = "report",
    ) -> str:
        """Save the PDF report.

        Returns:
            Path to the saved file.
        """
        filepath = self._path(prefix, "pdf")
        content = render_pdf(params, results, level)
        try:
            with open(filepath, "wb") as f:
                f.write(content)
        except OSError as e:
            log.error("pdf_save_failed", path=filepath, error=str(e))
            raise ExportError(f"Cannot write {filepath}") from e

        log.info("pdf_saved", path=filepath, level=level)
        return filepath
