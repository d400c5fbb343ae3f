"""Cross-offer comparison: best-offer flags and two-offer deltas.

Logic only; rendering belongs to the caller.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable

from feecalc.formatting import (
    format_currency_full,
    format_irr,
    format_moic,
    format_number,
    format_percent,
)
from feecalc.models.results import CalculationResult, ComparisonRow, ComparisonTable

TIE_TOLERANCE = Decimal("0.001")

# Undefined IRR ranks below any real rate
UNDEFINED_IRR = Decimal("-999")


class Unit(Enum):
    NUMBER = "number"
    CURRENCY = "currency"
    MULTIPLE = "multiple"
    PERCENT = "percent"


@dataclass(frozen=True)
class Metric:
    label: str
    key: str
    unit: Unit
    format: Callable[[CalculationResult], str]
    raw_value: Callable[[CalculationResult], Decimal]
    higher_is_better: bool
    highlight: bool = False


def _irr_value(r: CalculationResult) -> Decimal:
    return r.net_irr if r.net_irr is not None else UNDEFINED_IRR


METRICS: tuple[Metric, ...] = (
    Metric("Shares Acquired", "shares", Unit.NUMBER,
           lambda r: format_number(r.shares_acquired, 1), lambda r: r.shares_acquired, True),
    Metric("Total Cash Outlay", "outlay", Unit.CURRENCY,
           lambda r: format_currency_full(r.total_cash_outlay), lambda r: r.total_cash_outlay, False),
    Metric("Gross MOIC", "gmoic", Unit.MULTIPLE,
           lambda r: format_moic(r.gross_moic), lambda r: r.gross_moic, True),
    Metric("Net MOIC", "nmoic", Unit.MULTIPLE,
           lambda r: format_moic(r.net_moic), lambda r: r.net_moic, True, highlight=True),
    Metric("Net IRR", "nirr", Unit.PERCENT,
           lambda r: format_irr(r.net_irr), _irr_value, True, highlight=True),
    Metric("Net Return", "nret", Unit.CURRENCY,
           lambda r: format_currency_full(r.net_return), lambda r: r.net_return, True, highlight=True),
    Metric("Total Fees", "fees", Unit.CURRENCY,
           lambda r: format_currency_full(r.total_fees), lambda r: r.total_fees, False),
    Metric("Effective Fee Rate", "efr", Unit.PERCENT,
           lambda r: format_percent(r.effective_fee_rate), lambda r: r.effective_fee_rate, False),
    Metric("Break-even Price", "bep", Unit.CURRENCY,
           lambda r: "$" + format_number(r.break_even_price, 2), lambda r: r.break_even_price, False),
)


def best_offer_index(values: list[Decimal], higher_is_better: bool) -> int | None:
    """Index of the best value, or None when there is nothing to single out.

    Returns None for fewer than two values and when every value is within
    TIE_TOLERANCE of the first (numerically tied offers).
    """
    if len(values) <= 1:
        return None
    if all(abs(v - values[0]) < TIE_TOLERANCE for v in values):
        return None

    best = 0
    for i in range(1, len(values)):
        if higher_is_better and values[i] > values[best]:
            best = i
        elif not higher_is_better and values[i] < values[best]:
            best = i
    return best


def metric_delta(metric: Metric, first: CalculationResult, second: CalculationResult) -> str:
    """Signed change from the first offer to the second, formatted by unit."""
    if metric.key == "nirr" and (first.net_irr is None or second.net_irr is None):
        return "N/A"

    diff = metric.raw_value(second) - metric.raw_value(first)
    if abs(diff) < TIE_TOLERANCE:
        return "--"

    sign = "+" if diff > 0 else ""
    if metric.unit is Unit.MULTIPLE:
        return f"{sign}{float(diff):.2f}x"
    if metric.unit is Unit.PERCENT:
        return f"{sign}{float(diff) * 100:.1f}%"
    if metric.unit is Unit.NUMBER:
        return f"{sign}{format_number(diff, 1)}"
    return f"{sign}{format_currency_full(diff)}"


def compare_results(results: list[CalculationResult]) -> ComparisonTable:
    """Build the comparison table for results in display order."""
    with_delta = len(results) == 2
    rows = []
    for metric in METRICS:
        values = [metric.raw_value(r) for r in results]
        rows.append(
            ComparisonRow(
                label=metric.label,
                key=metric.key,
                values=[metric.format(r) for r in results],
                best_index=best_offer_index(values, metric.higher_is_better),
                highlight=metric.highlight,
                delta=metric_delta(metric, results[0], results[1]) if with_delta else None,
            )
        )
    return ComparisonTable(offer_names=[r.offer_name for r in results], rows=rows)


def as_tab_separated(table: ComparisonTable) -> str:
    """Plain-text table (tab separated) for pasting into a spreadsheet."""
    lines = ["\t".join(["Metric", *table.offer_names])]
    for row in table.rows:
        lines.append("\t".join([row.label, *row.values]))
    return "\n".join(lines)
