"""Multi-year investment projection.

Turns a ParameterSet into a year-by-year schedule of rent, operating costs,
annuity loan service, income tax, cash flow and net wealth, and derives the
summary KPIs from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite, inf

from rendite.core.financial import (
    calculate_annual_annuity,
    calculate_equity_irr,
    calculate_years_to_payoff,
    round_half_up,
)
from rendite.core.logging import get_logger
from rendite.domain.models.parameters import ParameterSet
from rendite.domain.models.results import ResultsSummary, YearRow

log = get_logger(__name__)


@dataclass(frozen=True)
class Aggregates:
    """Values fixed at purchase, constant over the horizon."""

    ancillary_costs: float
    total_costs: float
    equity: float
    loan0: float
    building_share: float
    afa_annual: float
    annuity: float

    @classmethod
    def from_parameters(cls, params: ParameterSet) -> Aggregates:
        acq = params.acquisition
        fin = params.financing

        ancillary_costs = acq.ancillary_costs
        total_costs = acq.total_costs
        equity = fin.equity_amount
        loan0 = max(0.0, total_costs - equity)
        building_share = acq.price_property * (1.0 - acq.land_share_pct / 100.0)
        afa_annual = building_share * params.tax.depreciation_pct / 100.0

        return cls(
            ancillary_costs=ancillary_costs,
            total_costs=total_costs,
            equity=equity,
            loan0=loan0,
            building_share=building_share,
            afa_annual=afa_annual,
            annuity=calculate_annual_annuity(loan0, fin.interest_pct, fin.initial_redemption_pct),
        )


@dataclass
class _CarryState:
    """Unrounded running state between years."""

    remaining_loan: float
    cumulated_cash: float = 0.0
    payoff_year: int | None = None


class ProjectionEngine:
    """Year-by-year projection of a single buy-and-hold investment.

    The engine has no state of its own; :meth:`run` is a pure function of
    its ParameterSet and performs no validation. Degenerate input yields
    degenerate numbers (NaN, infinity) rather than exceptions.
    """

    def run(self, params: ParameterSet) -> ResultsSummary:
        """Project the investment over ``settings.horizon_years``.

        Args:
            params: Complete input set

        Returns:
            Schedule and KPIs
        """
        agg = Aggregates.from_parameters(params)
        state = _CarryState(remaining_loan=agg.loan0)

        rows = [
            self._project_year(year, params, agg, state)
            for year in range(1, params.settings.horizon_years + 1)
        ]

        summary = self._summarize(params, agg, rows, state)
        log.debug(
            "projection_completed",
            horizon_years=len(rows),
            loan0=summary.loan0,
            total_profit=summary.total_profit,
        )
        return summary

    def _project_year(
        self,
        year: int,
        params: ParameterSet,
        agg: Aggregates,
        state: _CarryState,
    ) -> YearRow:
        """Compute one year and advance the carried state."""
        acq = params.acquisition
        ops_in = params.rent_ops
        fin = params.financing

        # Rent grows from year 2 on, market value already in year 1
        rent_growth_factor = (1.0 + ops_in.rent_growth_pct / 100.0) ** (year - 1)
        net_rent = ops_in.cold_rent_monthly * 12 * (1.0 - ops_in.vacancy_pct / 100.0) * rent_growth_factor

        ops = (
            ops_in.owner_costs_monthly + ops_in.mgmt_monthly + ops_in.capex_monthly
        ) * 12 + acq.other_costs_annual

        annuity, interest, principal = self._debt_service(year, fin.interest_pct, agg, state)

        cf_before_tax = net_rent - ops - annuity

        # Only interest and depreciation are deductible, never principal
        tax_base = net_rent - ops - interest - agg.afa_annual
        tax_amount = tax_base * params.tax.marginal_rate_pct / 100.0

        cf_after_tax = cf_before_tax - tax_amount
        state.cumulated_cash += cf_after_tax

        market_value = acq.price_property * (1.0 + ops_in.value_growth_pct / 100.0) ** year

        state.remaining_loan = max(0.0, state.remaining_loan - principal)
        net_wealth = market_value - state.remaining_loan + state.cumulated_cash

        return YearRow(
            year=year,
            net_rent=round_half_up(net_rent),
            ops=round_half_up(ops),
            annuity=round_half_up(annuity),
            interest=round_half_up(interest),
            principal=round_half_up(principal),
            tax=round_half_up(tax_amount),
            cf_before_tax=round_half_up(cf_before_tax),
            cf_after_tax=round_half_up(cf_after_tax),
            remaining_loan=round_half_up(state.remaining_loan),
            market_value=round_half_up(market_value),
            cumulated_cash=round_half_up(state.cumulated_cash),
            net_wealth=round_half_up(net_wealth),
        )

    def _debt_service(
        self,
        year: int,
        interest_pct: float,
        agg: Aggregates,
        state: _CarryState,
    ) -> tuple[float, float, float]:
        """Split this year's debt service into (annuity, interest, principal).

        The fixed annuity is charged in full while the loan is outstanding.
        In the payoff year only interest plus the remaining balance is due,
        and nothing afterwards.
        """
        if agg.loan0 <= 0 or state.remaining_loan <= 0:
            return 0.0, 0.0, 0.0

        interest = state.remaining_loan * interest_pct / 100.0
        principal = min(agg.annuity - interest, state.remaining_loan)

        if principal < state.remaining_loan:
            return agg.annuity, interest, principal

        if state.payoff_year is None:
            state.payoff_year = year
            log.debug("loan_retired", year=year, loan0=agg.loan0)
        return interest + principal, interest, principal

    def _summarize(
        self,
        params: ParameterSet,
        agg: Aggregates,
        rows: list[YearRow],
        state: _CarryState,
    ) -> ResultsSummary:
        """Derive KPIs from the aggregates and the schedule."""
        acq = params.acquisition
        fin = params.financing
        first = rows[0] if rows else None
        last = rows[-1] if rows else None

        equity = agg.equity

        brutto_yield = (
            params.rent_ops.cold_rent_monthly * 12 / acq.price_property
            if acq.price_property > 0
            else 0.0
        )

        net_wealth_end = last.net_wealth if last else equity
        coc_return = (net_wealth_end - equity) / equity if equity > 0 else inf
        total_profit = net_wealth_end - equity if last else 0.0

        equity_irr = None
        if last is not None and isfinite(last.market_value):
            equity_irr = calculate_equity_irr(
                equity,
                [row.cf_after_tax for row in rows],
                last.market_value - last.remaining_loan,
            )

        return ResultsSummary(
            ancillary_costs=round_half_up(agg.ancillary_costs),
            total_costs=round_half_up(agg.total_costs),
            equity=round_half_up(equity),
            loan0=round_half_up(agg.loan0),
            afa_annual=round_half_up(agg.afa_annual),
            rows=tuple(rows),
            brutto_yield=brutto_yield,
            monthly_cf1=round_half_up(first.cf_after_tax / 12) if first else 0.0,
            coc_return=coc_return,
            total_profit=round_half_up(total_profit),
            market_value_end=last.market_value if last else 0.0,
            remaining_loan_end=last.remaining_loan if last else round_half_up(agg.loan0),
            cumulated_cash_end=last.cumulated_cash if last else 0.0,
            payoff_year=state.payoff_year,
            years_to_payoff=calculate_years_to_payoff(
                agg.loan0, fin.interest_pct, fin.initial_redemption_pct
            ),
            equity_irr=equity_irr,
        )


def run_projection(params: ParameterSet) -> ResultsSummary:
    """Convenience wrapper around :class:`ProjectionEngine`."""
    return ProjectionEngine().run(params)
