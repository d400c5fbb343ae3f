"""Display formatting and flexible numeric input parsing."""

import re
from decimal import Decimal, InvalidOperation

SUFFIX_MULTIPLIERS = {
    "k": Decimal("1000"),
    "m": Decimal("1000000"),
    "b": Decimal("1000000000"),
}

_NUMBER_RE = re.compile(r"^(-?\d*\.?\d+)\s*([kmb])?$", re.IGNORECASE)


def format_currency(value: Decimal | float) -> str:
    """Compact currency: $1.23M, $12.3K, $1,234, -$500."""
    v = float(value)
    sign = "-" if v < 0 else ""
    v = abs(v)
    if v >= 1_000_000:
        return f"{sign}${v / 1_000_000:.2f}M"
    if v >= 10_000:
        return f"{sign}${v / 1_000:.1f}K"
    return f"{sign}${v:,.0f}"


def format_currency_full(value: Decimal | float) -> str:
    v = float(value)
    sign = "-" if v < 0 else ""
    return f"{sign}${abs(v):,.0f}"


def format_percent(value: Decimal | float) -> str:
    """Ratio as percent: 0.123 -> 12.3%."""
    return f"{float(value) * 100:.1f}%"


def format_moic(value: Decimal | float) -> str:
    return f"{float(value):.2f}x"


def format_irr(value: Decimal | float | None) -> str:
    if value is None:
        return "N/A"
    return format_percent(value)


def format_number(value: Decimal | float, decimals: int = 0) -> str:
    return f"{float(value):,.{decimals}f}"


def parse_number(raw: str, decimal_separator: str = ".") -> Decimal | None:
    """Parse human-entered numbers: "1,500", "2.5k", "1.2M", "3 b".

    decimal_separator="," accepts European entry ("1.500,5"). Returns None
    for empty or unparseable input.
    """
    text = raw.strip()
    if decimal_separator == ",":
        text = text.replace(".", "").replace(",", ".")
    else:
        text = text.replace(",", "")
    if text in ("", "-"):
        return None

    match = _NUMBER_RE.match(text)
    if not match:
        return None

    try:
        number = Decimal(match.group(1))
    except InvalidOperation:
        return None

    suffix = match.group(2)
    if suffix:
        number *= SUFFIX_MULTIPLIERS[suffix.lower()]
    return number


def clamp(
    value: Decimal, minimum: Decimal | None = None, maximum: Decimal | None = None
) -> Decimal:
    if minimum is not None and value < minimum:
        return minimum
    if maximum is not None and value > maximum:
        return maximum
    return value
