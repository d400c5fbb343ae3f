"""IRR and MOIC on Decimal cash flows.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from feecalc.engine.rootfind import solve_irr

FOUR_PLACES = Decimal("0.0001")


def compute_irr(cash_flows: list[Decimal]) -> Decimal | None:
    """Compute IRR from a vector of annual cash flows.

    cash_flows[0] should be negative (total cash outlay).
    cash_flows[-1] should include exit proceeds net of carry.

    Returns None when the IRR is undetermined (no sign change, or the
    solver finds no root in range).
    """
    # Convert to float for the root finder
    irr = solve_irr([float(cf) for cf in cash_flows])
    if irr is None:
        return None
    return Decimal(str(irr)).quantize(FOUR_PLACES, ROUND_HALF_UP)


def compute_moic(exit_value: Decimal, total_cash_outlay: Decimal) -> Decimal:
    """Multiple on invested capital = exit value / cash outlay."""
    if total_cash_outlay == 0:
        return Decimal("0")
    return (exit_value / total_cash_outlay).quantize(FOUR_PLACES, ROUND_HALF_UP)
