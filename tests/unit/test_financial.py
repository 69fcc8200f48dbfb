"""Unit tests for rendite.core.financial module."""

import math

import pytest
from rendite.core.financial import (
    calculate_ancillary_costs,
    calculate_annual_annuity,
    calculate_equity_irr,
    calculate_total_costs,
    calculate_years_to_payoff,
    round_half_up,
)


class TestRoundHalfUp:
    """Tests for round_half_up function."""

    def test_halves_round_up(self):
        """Positive halves go up, like the browser calculator."""
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_negative_halves_round_towards_positive(self):
        """-2.5 rounds to -2, not -3 (half towards +infinity)."""
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2852.64) == -2853

    def test_non_finite_passthrough(self):
        """NaN and infinity are returned unchanged instead of raising."""
        assert math.isnan(round_half_up(float("nan")))
        assert round_half_up(float("inf")) == float("inf")


class TestAcquisitionCosts:
    """Tests for ancillary and total cost helpers."""

    def test_ancillary_costs(self):
        """3.5 + 1.0 + 0.5 = 5% of 300k."""
        assert calculate_ancillary_costs(300_000, 3.5, 1.0, 0.5) == pytest.approx(15_000)

    def test_other_costs_added(self):
        """One-time other costs are added on top of the rates."""
        assert calculate_ancillary_costs(300_000, 3.5, 1.0, 0.5, 2_000) == pytest.approx(17_000)

    def test_total_costs(self):
        assert calculate_total_costs(300_000, 5_000, 15_000) == 320_000


class TestAnnualAnnuity:
    """Tests for calculate_annual_annuity function."""

    def test_standard_annuity(self):
        """Rates apply to the initial principal."""
        assert calculate_annual_annuity(283_500, 4.0, 2.0) == pytest.approx(17_010)

    def test_no_loan(self):
        """Zero or negative principal means no debt service."""
        assert calculate_annual_annuity(0, 4.0, 2.0) == 0.0
        assert calculate_annual_annuity(-1000, 4.0, 2.0) == 0.0


class TestYearsToPayoff:
    """Tests for calculate_years_to_payoff function."""

    def test_standard_loan(self):
        """4% interest + 2% redemption retires the loan in about 28 years."""
        years = calculate_years_to_payoff(283_500, 4.0, 2.0)
        assert 27.5 < years < 28.5

    def test_zero_rate(self):
        """Without interest the term is principal / annuity."""
        assert calculate_years_to_payoff(100_000, 0.0, 5.0) == pytest.approx(20.0)

    def test_interest_only_never_pays_off(self):
        """No redemption means the balance never falls."""
        assert calculate_years_to_payoff(100_000, 4.0, 0.0) is None

    def test_no_loan(self):
        assert calculate_years_to_payoff(0, 4.0, 2.0) == 0.0

    def test_higher_redemption_shortens_term(self):
        """Paying off faster should shorten the term."""
        slow = calculate_years_to_payoff(200_000, 3.5, 1.0)
        fast = calculate_years_to_payoff(200_000, 3.5, 3.0)
        assert fast < slow


class TestEquityIrr:
    """Tests for calculate_equity_irr function."""

    def test_terminal_only(self):
        """100 in, 121 out after two years is 10% p.a."""
        assert calculate_equity_irr(100, [0.0, 0.0], 121) == pytest.approx(0.10)

    def test_with_yearly_flows(self):
        """Constant 10% coupon and equity back at the end is 10%."""
        assert calculate_equity_irr(1000, [100.0, 100.0, 100.0], 1000) == pytest.approx(0.10)

    def test_undefined_without_equity(self):
        """No equity means no rate of return."""
        assert calculate_equity_irr(0, [100.0], 1000) is None

    def test_undefined_without_flows(self):
        assert calculate_equity_irr(1000, [], 1000) is None
