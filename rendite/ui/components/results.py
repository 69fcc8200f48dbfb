"""Result display components: KPI cards, schedule tables, assumptions."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from rendite.application.services.exporter import SCHEDULE_COLUMNS, assumption_rows
from rendite.core.formatting import format_euro, format_ratio
from rendite.domain.models.parameters import ParameterSet
from rendite.domain.models.results import COLUMN_LABELS, ResultsSummary


def render_kpi_dashboard(results: ResultsSummary | None) -> None:
    """Four headline KPI cards plus the loan extras."""
    if results is None:
        st.info("Bitte Kaufpreis und Kaltmiete eingeben, um die Kalkulation zu starten.")
        return

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Brutto-Rendite", format_ratio(results.brutto_yield, 2))
    col2.metric("Cashflow p.M. (Jahr 1)", format_euro(results.monthly_cf1))
    col3.metric("Eigenkapital", format_euro(results.equity))
    col4.metric("EK-Rendite gesamt", format_ratio(results.coc_return, 1))

    details = []
    if results.equity_irr is not None:
        details.append(f"IRR auf EK: {format_ratio(results.equity_irr, 2)}")
    if results.payoff_year is not None:
        details.append(f"Entschuldet in Jahr {results.payoff_year}")
    elif results.years_to_payoff is not None and results.years_to_payoff > 0:
        details.append(f"Tilgungsdauer ca. {results.years_to_payoff:.1f} Jahre")
    if details:
        st.caption(" · ".join(details))


def render_data_table(results: ResultsSummary, mode: str = "cashflow") -> None:
    """Schedule table in cash-flow or amortization layout."""
    columns = [COLUMN_LABELS[c] for c in SCHEDULE_COLUMNS[mode]]
    df = results.to_dataframe()[columns]

    st.dataframe(
        df.style.format({c: format_euro for c in columns[1:]}),
        hide_index=True,
        use_container_width=True,
    )


def render_assumptions(params: ParameterSet, results: ResultsSummary, level: str) -> None:
    """Assumptions behind the calculation, pro rows at level "pro" only."""
    rows = assumption_rows(params, results, level)
    st.table(pd.DataFrame(rows, columns=["Annahme", "Wert"]).set_index("Annahme"))
