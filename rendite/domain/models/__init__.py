"""Data models for rendite."""

from .parameters import (
    Acquisition,
    Financing,
    ParameterSet,
    RentOps,
    Settings,
    Tax,
    demo_data,
    zero_state,
)
from .results import COLUMN_LABELS, ResultsSummary, YearRow

__all__ = [
    "Acquisition",
    "RentOps",
    "Financing",
    "Tax",
    "Settings",
    "ParameterSet",
    "zero_state",
    "demo_data",
    "ResultsSummary",
    "YearRow",
    "COLUMN_LABELS",
]
