"""Financial calculation functions.

Acquisition cost, annuity loan and return helpers shared by the projection
engine and the caller-side services.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from math import isfinite

import numpy_financial as npf


def round_half_up(value: float) -> float:
    """Round to the nearest whole unit, halves towards +infinity.

    Non-finite values are returned unchanged so numeric anomalies propagate
    instead of raising.
    """
    if not isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def calculate_ancillary_costs(
    price_property: float,
    gr_est_pct: float,
    notary_pct: float,
    land_reg_pct: float,
    other_costs: float = 0.0,
) -> float:
    """Calculate one-time purchase side costs.

    Args:
        price_property: Purchase price of the property
        gr_est_pct: Real estate transfer tax rate %
        notary_pct: Notary fee rate %
        land_reg_pct: Land registry fee rate %
        other_costs: Further one-time costs (broker, appraisal, ...)

    Returns:
        Ancillary costs in currency units
    """
    rate_pct = gr_est_pct + notary_pct + land_reg_pct
    return price_property * rate_pct / 100.0 + other_costs


def calculate_total_costs(
    price_property: float,
    price_furniture: float,
    ancillary_costs: float,
) -> float:
    """Total acquisition cost: property, furniture and ancillary costs."""
    return price_property + price_furniture + ancillary_costs


def calculate_annual_annuity(
    loan0: float,
    interest_pct: float,
    initial_redemption_pct: float,
) -> float:
    """Calculate the fixed annual debt service of an annuity loan.

    Both rates apply to the initial principal, so the amount stays constant
    while the interest share shrinks with the outstanding balance.

    Args:
        loan0: Initial loan principal
        interest_pct: Nominal annual interest rate %
        initial_redemption_pct: Initial annual redemption rate %

    Returns:
        Annual annuity, 0 when there is no loan
    """
    if loan0 <= 0:
        return 0.0
    return loan0 * (interest_pct + initial_redemption_pct) / 100.0


def calculate_years_to_payoff(
    loan0: float,
    interest_pct: float,
    initial_redemption_pct: float,
) -> float | None:
    """Implied term in years until the fixed annuity retires the loan.

    Args:
        loan0: Initial loan principal
        interest_pct: Nominal annual interest rate %
        initial_redemption_pct: Initial annual redemption rate %

    Returns:
        Fractional number of years, 0 without a loan, None when the
        annuity never covers more than the interest
    """
    if loan0 <= 0:
        return 0.0

    annuity = calculate_annual_annuity(loan0, interest_pct, initial_redemption_pct)
    rate = interest_pct / 100.0

    if annuity <= loan0 * rate:
        return None

    if rate == 0:
        return loan0 / annuity

    years = float(npf.nper(rate, -annuity, loan0))
    return years if isfinite(years) else None


def calculate_equity_irr(
    equity: float,
    cash_flows: Sequence[float],
    terminal_value: float,
) -> float | None:
    """Internal rate of return on invested equity.

    The initial equity is an outflow at t=0, yearly after-tax cash flows are
    inflows, and the net asset value at the horizon is added to the last
    year's flow.

    Args:
        equity: Equity invested at purchase
        cash_flows: After-tax cash flow per year
        terminal_value: Market value minus remaining loan at the horizon

    Returns:
        IRR as a fraction (0.05 for 5%), or None when undefined
    """
    if equity <= 0 or not cash_flows:
        return None

    flows = [-float(equity), *[float(cf) for cf in cash_flows]]
    flows[-1] += terminal_value

    try:
        irr = float(npf.irr(flows))
    except (ValueError, FloatingPointError):
        return None

    return irr if isfinite(irr) else None
