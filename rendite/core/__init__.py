"""Core settings, logging, errors and financial helpers."""

from .exceptions import (
    ConfigurationError,
    ExportError,
    IncompleteParametersError,
    InvalidParameterError,
    RenditeError,
    ShareLinkError,
)
from .financial import (
    calculate_ancillary_costs,
    calculate_annual_annuity,
    calculate_equity_irr,
    calculate_total_costs,
    calculate_years_to_payoff,
    round_half_up,
)

__all__ = [
    "calculate_ancillary_costs",
    "calculate_annual_annuity",
    "calculate_equity_irr",
    "calculate_total_costs",
    "calculate_years_to_payoff",
    "round_half_up",
    # Exceptions
    "RenditeError",
    "InvalidParameterError",
    "IncompleteParametersError",
    "ShareLinkError",
    "ExportError",
    "ConfigurationError",
]
