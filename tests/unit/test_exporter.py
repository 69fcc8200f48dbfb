"""Unit tests for rendite.application.services.exporter module."""

import json
import math
import re

import pandas as pd
import pytest

from rendite.application.services.exporter import (
    ResultExporter,
    assumption_rows,
    kpi_rows,
    render_pdf,
    report_sections,
    schedule_rows,
    snapshot_payload,
    summary_text,
)


class TestKpiRows:
    """Tests for kpi_rows function."""

    def test_labels(self, demo_results):
        labels = [label for label, _ in kpi_rows(demo_results)]
        assert labels[0] == "Brutto-Rendite"
        assert "Gesamtgewinn" in labels
        assert len(labels) == 8

    def test_values_formatted(self, demo_results):
        rows = dict(kpi_rows(demo_results))
        assert rows["Brutto-Rendite"] == "4,80 %"
        assert rows["Eigenkapital eingesetzt"] == "31.500 €"
        assert rows["Cashflow p.M. (Jahr 1)"] == "-141 €"

    def test_infinite_return(self, engine, demo_params):
        results = engine.run(demo_params.updated("financing", equity_amount=0.0))
        assert math.isinf(results.coc_return)
        assert dict(kpi_rows(results))["EK-Rendite gesamt"] == "∞"


class TestAssumptionRows:
    """Tests for assumption_rows function."""

    def test_simple_level_hides_pro_rows(self, demo_params, demo_results):
        labels = dict(assumption_rows(demo_params, demo_results, "simple"))
        assert "Kaufpreis Immobilie" in labels
        assert "Grenzsteuersatz" not in labels
        assert "Bodenanteil" not in labels

    def test_pro_level_adds_rows(self, demo_params, demo_results):
        simple = assumption_rows(demo_params, demo_results, "simple")
        pro = dict(assumption_rows(demo_params, demo_results, "pro"))
        assert len(pro) == len(simple) + 6
        assert pro["AfA-Basis (Gebäudewert)"] == "198.000 €"

    def test_furniture_only_when_present(self, engine, demo_params, demo_results):
        assert "Möbel/Einrichtung" not in dict(assumption_rows(demo_params, demo_results))
        with_furniture = demo_params.updated("acquisition", price_furniture=8_000.0)
        rows = dict(assumption_rows(with_furniture, engine.run(with_furniture)))
        assert rows["Möbel/Einrichtung"] == "8.000 €"

    def test_level_does_not_change_results(self, engine, demo_params):
        """Display level is a presentation choice only."""
        results = engine.run(demo_params)
        assumption_rows(demo_params, results, "pro")
        assert engine.run(demo_params) == results


class TestSummaryText:
    """Tests for summary_text function."""

    def test_contains_kpis(self, demo_params, demo_results):
        text = summary_text(demo_params, demo_results)
        assert "Brutto-Rendite: 4,80 %" in text
        assert "Planungshorizont: 10 Jahre" in text

    def test_pro_level_lists_tax(self, demo_params, demo_results):
        assert "Grenzsteuersatz" in summary_text(demo_params, demo_results, "pro")
        assert "Grenzsteuersatz" not in summary_text(demo_params, demo_results, "simple")


class TestResultExporter:
    """Tests for ResultExporter file output."""

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "exports"
        ResultExporter(str(target))
        assert target.is_dir()

    def test_save_results(self, tmp_path, demo_params, demo_results):
        exporter = ResultExporter(str(tmp_path))
        path = exporter.save_results(demo_params, demo_results, metadata={"level": "pro"})

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        assert data["metadata"]["level"] == "pro"
        assert data["metadata"]["horizon_years"] == 10
        assert data["inputs"]["acquisition"]["priceProperty"] == 300_000
        assert data["results"]["loan0"] == 283_500
        assert len(data["results"]["rows"]) == 10

    def test_save_results_infinite_return(self, tmp_path, engine, demo_params):
        exporter = ResultExporter(str(tmp_path))
        params = demo_params.updated("financing", equity_amount=0.0)
        path = exporter.save_results(params, engine.run(params))

        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert math.isinf(data["results"]["cocReturn"])

    def test_save_schedule_csv(self, tmp_path, demo_results):
        exporter = ResultExporter(str(tmp_path))
        path = exporter.save_schedule_csv(demo_results)

        df = pd.read_csv(path)
        assert len(df) == 10
        assert df["Jahr"].tolist() == list(range(1, 11))
        assert df["Zinsen"].iloc[0] == pytest.approx(11_340)

    def test_save_pdf(self, tmp_path, demo_params, demo_results):
        exporter = ResultExporter(str(tmp_path))
        path = exporter.save_pdf(demo_params, demo_results, "pro")

        assert path.endswith(".pdf")
        with open(path, "rb") as f:
            assert f.read(4) == b"%PDF"


class TestSnapshotPayload:
    """The JSON snapshot shared by file export and the download button."""

    def test_layout(self, demo_params, demo_results):
        payload = snapshot_payload(demo_params, demo_results, {"level": "simple"})
        assert set(payload) == {"metadata", "inputs", "results"}
        assert payload["metadata"]["level"] == "simple"
        assert payload["metadata"]["horizon_years"] == 10
        assert payload["results"]["monthlyCF1"] == -141

    def test_saved_file_matches_payload(self, tmp_path, demo_params, demo_results):
        path = ResultExporter(str(tmp_path)).save_results(demo_params, demo_results)
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        expected = snapshot_payload(demo_params, demo_results)
        assert data["inputs"] == expected["inputs"]
        assert data["results"] == expected["results"]


class TestReportSections:
    """Content of the PDF report."""

    def test_titles(self, demo_params, demo_results):
        titles = [title for title, _ in report_sections(demo_params, demo_results)]
        assert titles == ["Kennzahlen & Ergebnisse", "Berechnungsannahmen", "Cashflow-Übersicht", "Tilgungsplan"]

    def test_pro_rows_only_at_pro_level(self, demo_params, demo_results):
        def labels(level):
            sections = dict(report_sections(demo_params, demo_results, level))
            return [row[0] for row in sections["Berechnungsannahmen"]]

        assert "Grenzsteuersatz" not in labels("simple")
        assert "Bodenanteil" not in labels("simple")
        assert "Grenzsteuersatz" in labels("pro")
        assert "AfA-Basis (Gebäudewert)" in labels("pro")

    def test_schedules_have_one_row_per_year(self, demo_results):
        cashflow = schedule_rows(demo_results, "cashflow")
        amortization = schedule_rows(demo_results, "amortization")

        assert cashflow[0][0] == "Jahr"
        assert len(cashflow) == len(amortization) == 11
        assert amortization[0] == ["Jahr", "Annuität", "Zinsen", "Tilgung", "Restschuld"]
        assert amortization[1] == ["1", "17.010 €", "11.340 €", "5.670 €", "277.830 €"]


class TestRenderPdf:
    """Tests for the paginated PDF report."""

    @pytest.mark.parametrize("level", ["simple", "pro"])
    def test_is_pdf(self, demo_params, demo_results, level):
        content = render_pdf(demo_params, demo_results, level)
        assert content.startswith(b"%PDF")
        assert content.rstrip().endswith(b"%%EOF")

    def test_schedules_start_on_new_page(self, engine, demo_params):
        params = demo_params.updated("settings", horizon_years=35)
        content = render_pdf(params, engine.run(params), "pro")
        page_count = max(int(n) for n in re.findall(rb"/Count (\d+)", content))
        assert page_count >= 2

    def test_infinite_return_renders(self, engine, demo_params):
        params = demo_params.updated("financing", equity_amount=0.0)
        assert render_pdf(params, engine.run(params)).startswith(b"%PDF")
