"""Input panel.

Renders every input of a ParameterSet and returns the edited copy. Pro-level
inputs (side cost rates, land share, growth, tax) are hidden at level
"simple" but keep their values.
"""

from __future__ import annotations

import streamlit as st

from rendite.application.services.validation import FIELD_BOUNDS, clamp_parameters, resolve_equity
from rendite.domain.models.parameters import ParameterSet


def _slider(label: str, section: str, name: str, value: float, step: float, help: str | None = None) -> float:
    low, high = FIELD_BOUNDS[(section, name)]
    return st.slider(
        label,
        min_value=float(low),
        max_value=float(high),
        value=float(min(max(value, low), high)),
        step=float(step),
        key=f"in_{section}_{name}",
        help=help,
    )


def _amount(label: str, section: str, name: str, value: float, step: float = 1000.0) -> float:
    return st.number_input(
        label,
        min_value=0.0,
        value=float(max(value, 0.0)),
        step=step,
        key=f"in_{section}_{name}",
    )


def render_level_toggle(level: str) -> str:
    """Simple/pro switch."""
    choice = st.radio(
        "Detailgrad",
        ["Einfach", "Profi"],
        index=1 if level == "pro" else 0,
        horizontal=True,
    )
    return "pro" if choice == "Profi" else "simple"


def render_input_panel(params: ParameterSet, level: str) -> ParameterSet:
    """Render all inputs and return the edited, clamped ParameterSet."""
    acq = params.acquisition
    ops = params.rent_ops
    fin = params.financing
    pro = level == "pro"

    st.markdown("### 🏠 Objekt & Kauf")
    price_property = _amount("Kaufpreis Immobilie (€)", "acquisition", "price_property", acq.price_property)
    price_furniture = _amount("Möbel/Einrichtung (€)", "acquisition", "price_furniture", acq.price_furniture, 500.0)

    gr_est_pct, notary_pct, land_reg_pct = acq.gr_est_pct, acq.notary_pct, acq.land_reg_pct
    other_costs, other_costs_annual = acq.other_costs, acq.other_costs_annual
    land_share_pct = acq.land_share_pct
    if pro:
        with st.expander("Kaufnebenkosten", expanded=False):
            col1, col2, col3 = st.columns(3)
            gr_est_pct = col1.number_input("GrESt (%)", 0.0, value=acq.gr_est_pct, step=0.1, key="in_grest")
            notary_pct = col2.number_input("Notar (%)", 0.0, value=acq.notary_pct, step=0.1, key="in_notary")
            land_reg_pct = col3.number_input("Grundbuch (%)", 0.0, value=acq.land_reg_pct, step=0.1, key="in_landreg")
            other_costs = _amount("Sonstige Kosten einmalig (€)", "acquisition", "other_costs", acq.other_costs, 500.0)
            other_costs_annual = _amount(
                "Sonstige Kosten p.a. (€)", "acquisition", "other_costs_annual", acq.other_costs_annual, 100.0
            )
        land_share_pct = _slider("Bodenanteil (%)", "acquisition", "land_share_pct", acq.land_share_pct, 1.0)

    st.markdown("### 💶 Miete & Bewirtschaftung")
    cold_rent_monthly = _amount("Kaltmiete p.M. (€)", "rent_ops", "cold_rent_monthly", ops.cold_rent_monthly, 50.0)
    vacancy_pct = _slider("Leerstand (%)", "rent_ops", "vacancy_pct", ops.vacancy_pct, 0.5)
    col1, col2, col3 = st.columns(3)
    with col1:
        owner_costs_monthly = _amount("Hausgeld n.u. (€)", "rent_ops", "owner_costs_monthly", ops.owner_costs_monthly, 10.0)
    with col2:
        mgmt_monthly = _amount("Verwaltung (€)", "rent_ops", "mgmt_monthly", ops.mgmt_monthly, 5.0)
    with col3:
        capex_monthly = _amount("Instandhaltung (€)", "rent_ops", "capex_monthly", ops.capex_monthly, 5.0)

    rent_growth_pct, value_growth_pct = ops.rent_growth_pct, ops.value_growth_pct
    if pro:
        rent_growth_pct = _slider("Mietsteigerung p.a. (%)", "rent_ops", "rent_growth_pct", ops.rent_growth_pct, 0.1)
        value_growth_pct = _slider("Wertsteigerung p.a. (%)", "rent_ops", "value_growth_pct", ops.value_growth_pct, 0.1)

    st.markdown("### 🏦 Finanzierung")
    equity_mode = "percent" if st.toggle(
        "Eigenkapital in % der Gesamtkosten", value=fin.equity_mode == "percent", key="in_equity_mode"
    ) else "amount"
    equity_amount, equity_percent = fin.equity_amount, fin.equity_percent
    if equity_mode == "percent":
        equity_percent = _slider("Eigenkapital (%)", "financing", "equity_percent", fin.equity_percent, 1.0)
    else:
        equity_amount = _amount("Eigenkapital (€)", "financing", "equity_amount", fin.equity_amount)
    interest_pct = _slider("Sollzins p.a. (%)", "financing", "interest_pct", fin.interest_pct, 0.1)
    initial_redemption_pct = _slider(
        "Anfangstilgung p.a. (%)", "financing", "initial_redemption_pct", fin.initial_redemption_pct, 0.1
    )
    horizon_years = int(_slider("Planungshorizont (Jahre)", "settings", "horizon_years", params.settings.horizon_years, 1))

    marginal_rate_pct, depreciation_pct = params.tax.marginal_rate_pct, params.tax.depreciation_pct
    if pro:
        st.markdown("### ⚖️ Steuern")
        marginal_rate_pct = _slider("Grenzsteuersatz (%)", "tax", "marginal_rate_pct", marginal_rate_pct, 0.5)
        depreciation_pct = _slider("AfA-Satz p.a. (%)", "tax", "depreciation_pct", depreciation_pct, 0.1)

    edited = (
        params.updated(
            "acquisition",
            price_property=price_property,
            price_furniture=price_furniture,
            gr_est_pct=gr_est_pct,
            notary_pct=notary_pct,
            land_reg_pct=land_reg_pct,
            other_costs=other_costs,
            other_costs_annual=other_costs_annual,
            land_share_pct=land_share_pct,
        )
        .updated(
            "rent_ops",
            cold_rent_monthly=cold_rent_monthly,
            vacancy_pct=vacancy_pct,
            owner_costs_monthly=owner_costs_monthly,
            mgmt_monthly=mgmt_monthly,
            capex_monthly=capex_monthly,
            rent_growth_pct=rent_growth_pct,
            value_growth_pct=value_growth_pct,
        )
        .updated(
            "financing",
            equity_mode=equity_mode,
            equity_amount=equity_amount,
            equity_percent=equity_percent,
            interest_pct=interest_pct,
            initial_redemption_pct=initial_redemption_pct,
        )
        .updated("tax", marginal_rate_pct=marginal_rate_pct, depreciation_pct=depreciation_pct)
        .updated("settings", horizon_years=horizon_years)
    )
    return clamp_parameters(resolve_equity(edited))
