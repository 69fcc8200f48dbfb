"""Display formatting shared by the UI and the exporter.

German number conventions: "." as thousands separator, "," as decimal mark.
"""

from __future__ import annotations

from math import isfinite, isinf

INFINITY_SYMBOL = "∞"


def _group_thousands(text: str) -> str:
    """Swap English separators for German ones."""
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_euro(value: float | None, decimals: int = 0) -> str:
    """Format a number as Euro amount, e.g. "1.234.567 €"."""
    if value is None:
        return "—"
    if not isfinite(value):
        return INFINITY_SYMBOL if value > 0 else "—"
    if decimals == 0:
        return _group_thousands(f"{int(round(value)):,}") + " €"
    return _group_thousands(f"{value:,.{decimals}f}") + " €"


def format_pct(value: float | None, decimals: int = 1) -> str:
    """Format a percentage value (3.5 means 3.5 %)."""
    if value is None:
        return "—"
    return _group_thousands(f"{value:.{decimals}f}") + " %"


def format_ratio(value: float | None, decimals: int = 1) -> str:
    """Format a fractional ratio as percentage.

    An infinite ratio (no equity committed) renders as the infinity symbol.
    """
    if value is None:
        return "—"
    if isinf(value) and value > 0:
        return INFINITY_SYMBOL
    return format_pct(value * 100.0, decimals)
