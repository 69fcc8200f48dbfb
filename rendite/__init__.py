"""Rendite-Kalkulator: buy-and-hold real estate investment projections."""

from rendite.domain.calculator.projection import ProjectionEngine, run_projection
from rendite.domain.models.parameters import ParameterSet, demo_data, zero_state
from rendite.domain.models.results import ResultsSummary, YearRow

__version__ = "1.0.0"

__all__ = [
    "ParameterSet",
    "ProjectionEngine",
    "ResultsSummary",
    "YearRow",
    "demo_data",
    "run_projection",
    "zero_state",
]
