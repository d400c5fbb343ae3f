"""Root finding for IRR and break-even searches.

Pure float math. No I/O.

- solve_irr: Newton-Raphson on NPV(r), falling back to bisection on
  [-0.5, 10] when Newton stalls, diverges or runs out of iterations.
- bisect_monotonic: bracket-halving search for a monotone scalar function,
  always returns a best-effort estimate.
"""

import logging
import math
from typing import Callable, Sequence

from scipy.optimize import bisect

logger = logging.getLogger(__name__)

IRR_INITIAL_GUESS = 0.10
IRR_MAX_ITERATIONS = 50
IRR_TOLERANCE = 1e-7
DERIVATIVE_FLOOR = 1e-12

# Economically meaningful IRR range (open interval)
MIN_RATE = -0.99
MAX_RATE = 100.0

# Bisection fallback bracket
BISECTION_LOW = -0.5
BISECTION_HIGH = 10.0
BISECTION_MAX_ITERATIONS = 100


def npv(cash_flows: Sequence[float], rate: float) -> float:
    """Net present value of cash_flows[t] received at period t."""
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(cash_flows))


def npv_derivative(cash_flows: Sequence[float], rate: float) -> float:
    """d(NPV)/d(rate)."""
    return sum(-t * cf / (1 + rate) ** (t + 1) for t, cf in enumerate(cash_flows) if t > 0)


def has_sign_change(cash_flows: Sequence[float]) -> bool:
    return any(cf > 0 for cf in cash_flows) and any(cf < 0 for cf in cash_flows)


def _in_rate_bounds(rate: float) -> bool:
    return MIN_RATE < rate < MAX_RATE


def solve_irr(
    cash_flows: Sequence[float],
    max_iterations: int = IRR_MAX_ITERATIONS,
    tolerance: float = IRR_TOLERANCE,
) -> float | None:
    """Rate r such that NPV(r) == 0, or None when no IRR can be determined.

    cash_flows[0] is at t=0 (usually the negative outlay). Returns None for
    fewer than two flows, for flows without a sign change, and when neither
    Newton nor the bracketed bisection finds an in-range root.
    """
    if len(cash_flows) < 2 or not has_sign_change(cash_flows):
        return None

    rate = IRR_INITIAL_GUESS
    for _ in range(max_iterations):
        value = npv(cash_flows, rate)
        slope = npv_derivative(cash_flows, rate)

        if abs(slope) < DERIVATIVE_FLOOR:
            logger.debug("IRR: stationary point at rate %.6f, falling back to bisection", rate)
            return bisect_irr(cash_flows)

        new_rate = rate - value / slope

        if abs(new_rate - rate) < tolerance:
            if not _in_rate_bounds(new_rate):
                logger.debug("IRR: converged to out-of-range rate %.6f", new_rate)
                return None
            return new_rate

        rate = new_rate
        if not math.isfinite(rate) or not _in_rate_bounds(rate):
            logger.debug("IRR: Newton diverged, falling back to bisection")
            return bisect_irr(cash_flows)

    logger.debug("IRR: Newton did not converge in %d iterations", max_iterations)
    return bisect_irr(cash_flows)


def bisect_irr(
    cash_flows: Sequence[float],
    low: float = BISECTION_LOW,
    high: float = BISECTION_HIGH,
    tolerance: float = IRR_TOLERANCE,
) -> float | None:
    """Bisection IRR on [low, high]. None when the bracket holds no sign change."""
    npv_low = npv(cash_flows, low)
    npv_high = npv(cash_flows, high)
    if npv_low * npv_high > 0:
        logger.debug("IRR: no root bracketed in [%s, %s]", low, high)
        return None

    def f(rate: float) -> float:
        value = npv(cash_flows, rate)
        # Treat a near-zero NPV as the root itself
        return 0.0 if abs(value) < tolerance else value

    return bisect(f, low, high, xtol=tolerance, maxiter=BISECTION_MAX_ITERATIONS, disp=False)


def bisect_monotonic(
    f: Callable[[float], float],
    low: float,
    high: float,
    max_iterations: int = 100,
    tolerance: float = 0.01,
) -> float:
    """Locate x in [low, high] with f(x) ~ 0 for a monotone f.

    Narrows toward the half whose sign disagrees with f(low) and stops early
    once |f(mid)| < tolerance. Never fails: without an early exit it returns
    the midpoint of the final bracket.
    """
    f_low = f(low)
    for _ in range(max_iterations):
        mid = (low + high) / 2
        f_mid = f(mid)
        if abs(f_mid) < tolerance:
            return mid
        if (f_mid < 0) == (f_low < 0):
            low, f_low = mid, f_mid
        else:
            high = mid
    return (low + high) / 2
