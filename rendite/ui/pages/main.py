"""Main page rendering.

Composes the input panel, KPI dashboard, charts and tables into the
calculator page. Results are recomputed on every rerun.
"""

from __future__ import annotations

import json
from datetime import date

import streamlit as st

from rendite.application.services.exporter import render_pdf, snapshot_payload, summary_text
from rendite.application.services.share_link import build_share_url
from rendite.application.services.validation import is_ready
from rendite.core.settings import get_settings
from rendite.domain.calculator.projection import run_projection
from rendite.domain.models.parameters import ParameterSet
from rendite.domain.models.results import ResultsSummary
from rendite.ui.components.charts import render_cashflow_chart, render_wealth_chart
from rendite.ui.components.results import (
    render_assumptions,
    render_data_table,
    render_kpi_dashboard,
)
from rendite.ui.components.sidebar import render_input_panel, render_level_toggle
from rendite.ui.state import SessionManager


def render_header() -> None:
    st.title("🏢 Rendite-Kalkulator")
    st.caption("Cashflow, Tilgung und Vermögensaufbau einer Kapitalanlage-Immobilie")


def render_actions(params: ParameterSet, results: ResultsSummary | None, level: str) -> None:
    """Demo/reset buttons and export actions."""
    col1, col2, col3, col4, col5 = st.columns(5)
    if col1.button("✨ Beispieldaten laden", use_container_width=True):
        SessionManager.load_demo()
        st.rerun()
    if col2.button("↺ Reset", use_container_width=True):
        SessionManager.reset()
        st.rerun()

    if results is None or not get_settings().enable_export:
        return

    col3.download_button(
        "⬇ CSV",
        results.to_dataframe().to_csv(index=False).encode("utf-8"),
        file_name="rendite_kalkulation.csv",
        mime="text/csv",
        use_container_width=True,
    )
    snapshot = snapshot_payload(params, results, {"level": level})
    col4.download_button(
        "⬇ JSON",
        json.dumps(snapshot, indent=2, ensure_ascii=False).encode("utf-8"),
        file_name="rendite_kalkulation.json",
        mime="application/json",
        use_container_width=True,
    )
    col5.download_button(
        "⬇ PDF",
        render_pdf(params, results, level),
        file_name=f"rendite_kalkulation_{date.today():%Y-%m-%d}.pdf",
        mime="application/pdf",
        use_container_width=True,
    )

    with st.expander("🔗 Share-Link & Zusammenfassung"):
        st.code(build_share_url(params, level), language=None)
        st.code(summary_text(params, results, level), language=None)


def render_main_page() -> None:
    """Render the full calculator."""
    SessionManager.initialize()
    render_header()

    notice = SessionManager.pop_notice()
    if notice:
        kind, message = notice
        getattr(st, kind, st.info)(message)

    with st.sidebar:
        level = render_level_toggle(SessionManager.get_level())
        SessionManager.set_level(level)
        params = render_input_panel(SessionManager.get_params(), level)
        SessionManager.set_params(params)

    results = run_projection(params) if is_ready(params) else None

    render_actions(params, results, level)
    render_kpi_dashboard(results)
    if results is None:
        return

    tab_charts, tab_cashflow, tab_amort, tab_assumptions = st.tabs(
        ["📈 Diagramme", "🧮 Kalkulation", "🏦 Tilgung", "⚙️ Annahmen"]
    )
    df = results.to_dataframe()
    with tab_charts:
        render_wealth_chart(df)
        render_cashflow_chart(df)
    with tab_cashflow:
        render_data_table(results, "cashflow")
    with tab_amort:
        render_data_table(results, "amortization")
    with tab_assumptions:
        render_assumptions(params, results, level)

    if get_settings().debug_mode:
        with st.expander("🐞 Debug"):
            st.code(json.dumps(snapshot_payload(params, results, {"level": level}), indent=2), language="json")
