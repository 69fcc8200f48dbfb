"""Chart components for visualization."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from rendite.domain.models.results import COLUMN_LABELS

_YEAR = COLUMN_LABELS["year"]
_LEGEND = dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)


def render_wealth_chart(df: pd.DataFrame, key: str = "wealth") -> None:
    """Net wealth as area, market value and remaining loan as lines."""
    if df is None or df.empty:
        st.warning("Keine Daten verfügbar.")
        return

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df[_YEAR],
        y=df[COLUMN_LABELS["net_wealth"]],
        name="Nettovermögen",
        fill="tozeroy",
        line=dict(color="#4CC38A"),
        mode="lines",
    ))
    fig.add_trace(go.Scatter(
        x=df[_YEAR],
        y=df[COLUMN_LABELS["market_value"]],
        name="Marktwert",
        line=dict(color="#17a2b8", width=2),
        mode="lines",
    ))
    fig.add_trace(go.Scatter(
        x=df[_YEAR],
        y=df[COLUMN_LABELS["remaining_loan"]],
        name="Restschuld",
        line=dict(color="#dc3545", width=3),
        mode="lines",
    ))
    fig.update_layout(
        title="Vermögensentwicklung",
        xaxis_title="Jahr",
        yaxis_title="Betrag (€)",
        hovermode="x unified",
        legend=_LEGEND,
    )
    st.plotly_chart(fig, use_container_width=True, key=f"chart_{key}")


def render_cashflow_chart(df: pd.DataFrame, key: str = "cashflow") -> None:
    """Yearly cash flow before/after tax with the cumulated line."""
    if df is None or df.empty:
        return

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=df[_YEAR],
        y=df[COLUMN_LABELS["cf_before_tax"]],
        name="Cashflow vor Steuern",
        marker_color="#94a3b8",
    ))
    fig.add_trace(go.Bar(
        x=df[_YEAR],
        y=df[COLUMN_LABELS["cf_after_tax"]],
        name="Cashflow nach Steuern",
        marker_color="#4CC38A",
    ))
    fig.add_trace(go.Scatter(
        x=df[_YEAR],
        y=df[COLUMN_LABELS["cumulated_cash"]],
        name="Kumuliert",
        line=dict(color="#ffc107", width=3),
        mode="lines+markers",
    ))
    fig.update_layout(
        title="Cashflow-Entwicklung",
        barmode="group",
        xaxis_title="Jahr",
        yaxis_title="Betrag (€)",
        hovermode="x unified",
        legend=_LEGEND,
    )
    st.plotly_chart(fig, use_container_width=True, key=f"chart_{key}")
