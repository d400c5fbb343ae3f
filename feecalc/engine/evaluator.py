"""Offer evaluator: composes fee, carry and IRR modules into one result per offer.

Pure computation. No I/O. (Scenario, Offer) in, CalculationResult out.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from feecalc.models.offer import Offer
from feecalc.models.results import CalculationResult, FeeBreakdown
from feecalc.models.scenario import Scenario

from feecalc.engine.carry import offer_carry
from feecalc.engine.fees import (
    annual_admin_fee,
    annual_fees,
    annual_management_fee,
    placement_fee,
    setup_fee,
)
from feecalc.engine.irr import compute_irr, compute_moic
from feecalc.engine.rootfind import bisect_monotonic

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")

# Break-even search bracket, as a multiple of the offer's price per share
BREAK_EVEN_PRICE_MULTIPLE = 20
BREAK_EVEN_ITERATIONS = 100
BREAK_EVEN_TOLERANCE = 0.01  # Currency units of net return


@dataclass(frozen=True)
class _CoreFigures:
    """Unrounded figures for one (scenario, offer) evaluation."""
    shares_acquired: Decimal
    setup_fee: Decimal
    placement_fee: Decimal
    total_cash_outlay: Decimal
    gross_exit_value: Decimal
    gross_profit: Decimal
    total_management_fees: Decimal
    total_admin_fees: Decimal
    carry: Decimal
    net_exit_value: Decimal
    net_return: Decimal
    cash_flows: list[Decimal]

    @property
    def upfront_fees(self) -> Decimal:
        return self.setup_fee + self.placement_fee

    @property
    def total_fees(self) -> Decimal:
        return self.upfront_fees + self.total_management_fees + self.total_admin_fees + self.carry


def shares_acquired(investment_amount: Decimal, price_per_share: Decimal) -> Decimal:
    if price_per_share <= 0:
        return Decimal("0")
    return investment_amount / price_per_share


def _compute_core(scenario: Scenario, offer: Offer) -> _CoreFigures:
    investment = scenario.investment_amount
    horizon = scenario.time_horizon

    shares = shares_acquired(investment, offer.price_per_share)
    setup = setup_fee(offer, investment)
    placement = placement_fee(offer, investment)
    total_cash_outlay = investment + setup + placement
    gross_exit_value = shares * scenario.exit_price

    # Recurring fees, each year charged on that year's NAV estimate.
    # The IRR series books years 1..T-1 as negative flows; the final
    # year's fees are netted against exit proceeds.
    total_management = Decimal("0")
    total_admin = Decimal("0")
    cash_flows: list[Decimal] = [-total_cash_outlay]
    for year in range(1, horizon + 1):
        management, admin = annual_fees(offer, scenario, gross_exit_value, year)
        total_management += management
        total_admin += admin
        if year < horizon:
            cash_flows.append(-(management + admin))

    gross_profit = gross_exit_value - investment
    carry = offer_carry(offer, investment, gross_exit_value, horizon)

    # At exit the NAV estimate is the gross exit value itself
    final_year_fees = annual_management_fee(offer, investment, gross_exit_value) + annual_admin_fee(
        offer, investment
    )
    cash_flows.append(gross_exit_value - final_year_fees - carry)

    net_exit_value = gross_exit_value - total_management - total_admin - carry

    return _CoreFigures(
        shares_acquired=shares,
        setup_fee=setup,
        placement_fee=placement,
        total_cash_outlay=total_cash_outlay,
        gross_exit_value=gross_exit_value,
        gross_profit=gross_profit,
        total_management_fees=total_management,
        total_admin_fees=total_admin,
        carry=carry,
        net_exit_value=net_exit_value,
        net_return=net_exit_value - total_cash_outlay,
        cash_flows=cash_flows,
    )


def net_return_at_price(scenario: Scenario, offer: Offer, exit_price: Decimal) -> Decimal:
    """Unrounded net return if the exit happened at exit_price."""
    return _compute_core(scenario.with_exit_price(exit_price), offer).net_return


def find_break_even_price(scenario: Scenario, offer: Offer) -> Decimal:
    """Exit price at which net return is zero.

    Bisects over [0, 20 x price per share]. Net return rises with exit price
    for every supported fee structure, so the bracket is assumed to hold the
    root; otherwise the final bracket midpoint is returned.
    """
    high = float(offer.price_per_share) * BREAK_EVEN_PRICE_MULTIPLE

    def f(price: float) -> float:
        return float(net_return_at_price(scenario, offer, Decimal(str(price))))

    price = bisect_monotonic(
        f,
        0.0,
        high,
        max_iterations=BREAK_EVEN_ITERATIONS,
        tolerance=BREAK_EVEN_TOLERANCE,
    )
    return Decimal(str(price))


def evaluate_offer(scenario: Scenario, offer: Offer) -> CalculationResult:
    """Full evaluation of one offer under the scenario.

    Deterministic and total: never raises on numeric input. Invalid terms
    are reported by the validators, not here.
    """
    core = _compute_core(scenario, offer)

    if core.gross_profit > 0:
        effective_fee_rate = (core.total_fees / core.gross_profit).quantize(
            FOUR_PLACES, ROUND_HALF_UP
        )
    else:
        effective_fee_rate = Decimal("0")

    return CalculationResult(
        offer_id=offer.id,
        offer_name=offer.name,
        offer_color=offer.color,
        shares_acquired=core.shares_acquired.quantize(FOUR_PLACES, ROUND_HALF_UP),
        upfront_fees=core.upfront_fees.quantize(TWO_PLACES, ROUND_HALF_UP),
        total_cash_outlay=core.total_cash_outlay.quantize(TWO_PLACES, ROUND_HALF_UP),
        gross_exit_value=core.gross_exit_value.quantize(TWO_PLACES, ROUND_HALF_UP),
        gross_profit=core.gross_profit.quantize(TWO_PLACES, ROUND_HALF_UP),
        gross_moic=compute_moic(core.gross_exit_value, core.total_cash_outlay),
        net_exit_value=core.net_exit_value.quantize(TWO_PLACES, ROUND_HALF_UP),
        net_return=core.net_return.quantize(TWO_PLACES, ROUND_HALF_UP),
        net_moic=compute_moic(core.net_exit_value, core.total_cash_outlay),
        net_irr=compute_irr(core.cash_flows),
        total_fees=core.total_fees.quantize(TWO_PLACES, ROUND_HALF_UP),
        effective_fee_rate=effective_fee_rate,
        break_even_price=find_break_even_price(scenario, offer),
        fee_breakdown=FeeBreakdown(
            setup_fee=core.setup_fee.quantize(TWO_PLACES, ROUND_HALF_UP),
            placement_fee=core.placement_fee.quantize(TWO_PLACES, ROUND_HALF_UP),
            total_management_fees=core.total_management_fees.quantize(TWO_PLACES, ROUND_HALF_UP),
            total_admin_fees=core.total_admin_fees.quantize(TWO_PLACES, ROUND_HALF_UP),
            carry=core.carry.quantize(TWO_PLACES, ROUND_HALF_UP),
        ),
    )


def evaluate_offers(scenario: Scenario, offers: list[Offer] | tuple[Offer, ...]) -> list[CalculationResult]:
    """Evaluate each offer independently, preserving display order."""
    return [evaluate_offer(scenario, offer) for offer in offers]
