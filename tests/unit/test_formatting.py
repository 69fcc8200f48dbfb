"""Unit tests for rendite.core.formatting module."""

from rendite.core.formatting import format_euro, format_pct, format_ratio


class TestFormatEuro:

    def test_thousands(self):
        assert format_euro(1_234_567) == "1.234.567 €"

    def test_negative(self):
        assert format_euro(-1_689) == "-1.689 €"

    def test_decimals(self):
        assert format_euro(1234.5, 2) == "1.234,50 €"

    def test_none(self):
        assert format_euro(None) == "—"


class TestFormatPct:

    def test_decimal_comma(self):
        assert format_pct(3.5) == "3,5 %"

    def test_decimals(self):
        assert format_pct(4.0, 2) == "4,00 %"


class TestFormatRatio:

    def test_fraction_to_percent(self):
        assert format_ratio(0.048, 2) == "4,80 %"

    def test_negative(self):
        assert format_ratio(-0.25) == "-25,0 %"

    def test_infinity_symbol(self):
        """Infinite return (no equity) is shown as a symbol, not a number."""
        assert format_ratio(float("inf")) == "∞"
