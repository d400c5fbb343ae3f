from decimal import Decimal

import pytest

from feecalc.formatting import (
    clamp,
    format_currency,
    format_currency_full,
    format_irr,
    format_moic,
    format_number,
    format_percent,
    parse_number,
)


class TestFormatting:
    def test_currency_compact(self):
        assert format_currency(Decimal("1234567")) == "$1.23M"
        assert format_currency(Decimal("12345")) == "$12.3K"
        assert format_currency(Decimal("1234")) == "$1,234"
        assert format_currency(Decimal("-25000")) == "-$25.0K"

    def test_currency_full(self):
        assert format_currency_full(Decimal("227194.24")) == "$227,194"
        assert format_currency_full(Decimal("-50")) == "-$50"

    def test_ratios(self):
        assert format_percent(Decimal("0.4422")) == "44.2%"
        assert format_moic(Decimal("2.2719")) == "2.27x"
        assert format_irr(Decimal("0.1")) == "10.0%"
        assert format_irr(None) == "N/A"

    def test_number(self):
        assert format_number(Decimal("1000"), 1) == "1,000.0"


class TestParseNumber:
    @pytest.mark.parametrize("raw,expected", [
        ("1500", Decimal("1500")),
        ("1,500", Decimal("1500")),
        ("  42.5 ", Decimal("42.5")),
        ("2.5k", Decimal("2500")),
        ("1.2M", Decimal("1200000")),
        ("3 b", Decimal("3000000000")),
        ("-5", Decimal("-5")),
        (".5", Decimal("0.5")),
    ])
    def test_valid(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["", "-", "abc", "1.2.3", "5x", "k"])
    def test_invalid(self, raw):
        assert parse_number(raw) is None

    def test_comma_decimal_separator(self):
        assert parse_number("1.500,5", decimal_separator=",") == Decimal("1500.5")
        assert parse_number("2,5k", decimal_separator=",") == Decimal("2500")


class TestClamp:
    def test_bounds(self):
        assert clamp(Decimal("5"), Decimal("0"), Decimal("3")) == Decimal("3")
        assert clamp(Decimal("-1"), Decimal("0")) == Decimal("0")
        assert clamp(Decimal("2")) == Decimal("2")
