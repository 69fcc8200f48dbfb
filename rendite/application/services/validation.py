"""Caller-side input validation.

The projection engine accepts any numeric input. This module is the layer
in front of it: readiness gating, range clamping and equity resolution, as
applied by the calculator UI and by share-link decoding.
"""

from __future__ import annotations

from typing import Any

from rendite.core.exceptions import IncompleteParametersError
from rendite.core.financial import round_half_up
from rendite.core.logging import get_logger
from rendite.domain.models.parameters import SECTIONS, ParameterSet

log = get_logger(__name__)

# (section, field) -> (min, max); None means unbounded
FIELD_BOUNDS: dict[tuple[str, str], tuple[float | None, float | None]] = {
    ("acquisition", "price_property"): (0.0, None),
    ("acquisition", "price_furniture"): (0.0, None),
    ("acquisition", "gr_est_pct"): (0.0, None),
    ("acquisition", "notary_pct"): (0.0, None),
    ("acquisition", "land_reg_pct"): (0.0, None),
    ("acquisition", "other_costs"): (0.0, None),
    ("acquisition", "other_costs_annual"): (0.0, None),
    ("acquisition", "land_share_pct"): (0.0, 80.0),
    ("rent_ops", "cold_rent_monthly"): (0.0, None),
    ("rent_ops", "vacancy_pct"): (0.0, 15.0),
    ("rent_ops", "owner_costs_monthly"): (0.0, None),
    ("rent_ops", "mgmt_monthly"): (0.0, None),
    ("rent_ops", "capex_monthly"): (0.0, None),
    ("rent_ops", "rent_growth_pct"): (0.0, 10.0),
    ("rent_ops", "value_growth_pct"): (0.0, 10.0),
    ("financing", "equity_amount"): (0.0, None),
    ("financing", "equity_percent"): (0.0, 100.0),
    ("financing", "interest_pct"): (0.0, 10.0),
    ("financing", "initial_redemption_pct"): (0.0, 10.0),
    ("tax", "marginal_rate_pct"): (0.0, 45.0),
    ("tax", "depreciation_pct"): (2.0, 5.0),
    ("settings", "horizon_years"): (1, 35),
}

def _clamp(value: float, bounds: tuple[float | None, float | None]) -> float:
    low, high = bounds
    if low is not None and value < low:
        return low
    if high is not None and value > high:
        return high
    return value


def clamp_parameters(params: ParameterSet) -> ParameterSet:
    """Clamp every bounded field into its allowed range.

    Equity is additionally capped at the total acquisition cost, unless
    that cost is still 0 (nothing entered yet).

    Args:
        params: Input set, possibly out of range

    Returns:
        New ParameterSet within bounds
    """
    changes: dict[str, dict[str, Any]] = {section: {} for section in SECTIONS}

    for (section, name), bounds in FIELD_BOUNDS.items():
        value = getattr(getattr(params, section), name)
        new_value = _clamp(value, bounds)
        if new_value != value:
            changes[section][name] = new_value

    result = params
    for section, fields in changes.items():
        if fields:
            result = result.updated(section, **fields)

    total_costs = result.acquisition.total_costs
    if total_costs > 0 and result.financing.equity_amount > total_costs:
        result = result.updated("financing", equity_amount=total_costs)

    clamped = sorted(f"{s}.{n}" for s, fields in changes.items() for n in fields)
    if clamped:
        log.info("parameters_clamped", fields=clamped)
    return result


def resolve_equity(params: ParameterSet) -> ParameterSet:
    """Derive the equity amount from the percentage when in percent mode.

    In amount mode the input is returned unchanged.
    """
    fin = params.financing
    if fin.equity_mode != "percent":
        return params

    amount = round_half_up(params.acquisition.total_costs * fin.equity_percent / 100.0)
    return params.updated("financing", equity_amount=amount)


def missing_required_fields(params: ParameterSet) -> list[str]:
    """List required fields that do not yet allow a calculation."""
    missing = []
    if not params.acquisition.price_property > 0:
        missing.append("acquisition.price_property")
    if not params.rent_ops.cold_rent_monthly > 0:
        missing.append("rent_ops.cold_rent_monthly")
    if not params.financing.equity_amount >= 0:
        missing.append("financing.equity_amount")
    if not params.financing.interest_pct >= 0:
        missing.append("financing.interest_pct")
    if not params.financing.initial_redemption_pct >= 0:
        missing.append("financing.initial_redemption_pct")
    if not params.settings.horizon_years >= 1:
        missing.append("settings.horizon_years")
    return missing


def is_ready(params: ParameterSet) -> bool:
    """True when the required fields allow a meaningful calculation."""
    return not missing_required_fields(params)


def require_ready(params: ParameterSet) -> ParameterSet:
    """Return params unchanged, or raise if required fields are missing.

    Raises:
        IncompleteParametersError: Listing the offending fields
    """
    missing = missing_required_fields(params)
    if missing:
        raise IncompleteParametersError(missing)
    return params
