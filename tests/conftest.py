"""Pytest fixtures for rendite tests."""

import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rendite.domain.calculator.projection import ProjectionEngine
from rendite.domain.models.parameters import demo_data, zero_state


@pytest.fixture
def engine():
    return ProjectionEngine()


@pytest.fixture
def demo_params():
    """Demo scenario: 300k property, 1,200/month rent, 31,500 equity."""
    return demo_data()


@pytest.fixture
def zero_params():
    return zero_state()


@pytest.fixture
def demo_results(engine, demo_params):
    return engine.run(demo_params)


@pytest.fixture
def small_loan_params(demo_params):
    """10,000 loan repaid by a 5,000 annuity within three years.

    100k price without side costs, 90k equity, 5% interest, 45% redemption.
    """
    return (
        demo_params
        .updated(
            "acquisition",
            price_property=100_000.0,
            gr_est_pct=0.0,
            notary_pct=0.0,
            land_reg_pct=0.0,
        )
        .updated(
            "financing",
            equity_amount=90_000.0,
            interest_pct=5.0,
            initial_redemption_pct=45.0,
        )
        .updated("settings", horizon_years=5)
    )
