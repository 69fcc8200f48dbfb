"""Projection result models.

A ResultsSummary holds the year-by-year schedule produced by the projection
engine plus the aggregate KPIs derived from it. Both models are frozen.
"""

from __future__ import annotations

from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_RESULT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    ser_json_inf_nan="constants",
)

# Display labels for the schedule, in row field order
COLUMN_LABELS: dict[str, str] = {
    "year": "Jahr",
    "net_rent": "Nettomiete",
    "ops": "Bewirtschaftung",
    "annuity": "Annuität",
    "interest": "Zinsen",
    "principal": "Tilgung",
    "tax": "Steuern",
    "cf_before_tax": "Cashflow vor Steuern",
    "cf_after_tax": "Cashflow nach Steuern",
    "remaining_loan": "Restschuld",
    "market_value": "Marktwert",
    "cumulated_cash": "Kumulierter Cashflow",
    "net_wealth": "Nettovermögen",
}


class YearRow(BaseModel):
    """One projected year. Amounts are rounded to whole units."""

    model_config = _RESULT_CONFIG

    year: int
    net_rent: float
    ops: float
    annuity: float
    interest: float
    principal: float
    tax: float
    cf_before_tax: float
    cf_after_tax: float
    remaining_loan: float
    market_value: float
    cumulated_cash: float
    net_wealth: float

    def to_dict(self) -> dict[str, Any]:
        """Row keyed by display label."""
        return {label: getattr(self, field) for field, label in COLUMN_LABELS.items()}


class ResultsSummary(BaseModel):
    """Full projection output: aggregates, schedule and KPIs."""

    model_config = _RESULT_CONFIG

    # Acquisition & financing aggregates
    ancillary_costs: float
    total_costs: float
    equity: float
    loan0: float
    afa_annual: float

    rows: tuple[YearRow, ...] = ()

    # KPIs
    brutto_yield: float
    monthly_cf1: float = Field(alias="monthlyCF1")
    coc_return: float
    total_profit: float
    market_value_end: float
    remaining_loan_end: float
    cumulated_cash_end: float

    # Loan & return extras
    payoff_year: int | None = None
    years_to_payoff: float | None = None
    equity_irr: float | None = None

    @property
    def horizon_years(self) -> int:
        return len(self.rows)

    @property
    def net_wealth_end(self) -> float:
        return self.rows[-1].net_wealth if self.rows else self.equity

    def to_dataframe(self) -> pd.DataFrame:
        """Schedule as a DataFrame with display labels as columns."""
        return pd.DataFrame(
            [row.to_dict() for row in self.rows],
            columns=list(COLUMN_LABELS.values()),
        )
