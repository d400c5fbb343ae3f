"""Carried interest under a European (whole-investment) waterfall.

Distribution order:
  1. Return of capital
  2. Preferred return (hurdle), compounding annually over the holding period
  3. GP catch-up until the GP holds carry% of all profit
  4. Residual profit split at the carry rate

Pure functions. No I/O.
"""

from decimal import Decimal

from feecalc.models.offer import Offer

HUNDRED = Decimal("100")


def preferred_return(
    investment_amount: Decimal, hurdle_rate_percent: Decimal, time_horizon: int
) -> Decimal:
    """Compounded hurdle owed to the investor before any carry."""
    hurdle_rate = hurdle_rate_percent / HUNDRED
    if hurdle_rate <= 0:
        return Decimal("0")
    return investment_amount * ((1 + hurdle_rate) ** time_horizon - 1)


def compute_carry(
    investment_amount: Decimal,
    gross_profit: Decimal,
    hurdle_rate_percent: Decimal,
    catch_up_percent: Decimal,
    carry_percent: Decimal,
    time_horizon: int,
) -> Decimal:
    """GP carry on gross profit.

    Args:
        investment_amount: Capital returned first (tier 1)
        gross_profit: Gross exit value - investment amount
        hurdle_rate_percent: Annual preferred return, e.g. Decimal("8")
        catch_up_percent: GP share of profit above the hurdle during catch-up
        carry_percent: GP's target share of total profit
        time_horizon: Years the hurdle compounds
    """
    if carry_percent <= 0 or gross_profit <= 0:
        return Decimal("0")

    carry_rate = carry_percent / HUNDRED
    pref = preferred_return(investment_amount, hurdle_rate_percent, time_horizon)
    if gross_profit <= pref:
        return Decimal("0")

    profit_above_hurdle = gross_profit - pref

    if catch_up_percent <= 0:
        return profit_above_hurdle * carry_rate

    # GP takes catch_up_rate of profit above the hurdle until it has carry_rate
    # of the whole profit; catch_up_amount is the slice of profit that takes.
    catch_up_rate = catch_up_percent / HUNDRED
    catch_up_amount = gross_profit * carry_rate / catch_up_rate

    if profit_above_hurdle <= catch_up_amount:
        return profit_above_hurdle * catch_up_rate

    return catch_up_amount * catch_up_rate + (profit_above_hurdle - catch_up_amount) * carry_rate


def effective_carry_percent(offer: Offer, gross_moic: Decimal) -> Decimal:
    """Carry rate for profit earned at a given gross multiple.

    The first tier whose [floor, ceiling) band contains gross_moic sets the
    rate. No tiers, or no matching tier, leaves the offer's flat carry_percent.
    """
    for tier in offer.hurdle_tiers:
        if tier.contains(gross_moic):
            return tier.carry_rate
    return offer.carry_percent


def tier_profit_bands(
    offer: Offer, investment_amount: Decimal, gross_profit: Decimal
) -> list[tuple[Decimal, Decimal]]:
    """Split [0, gross_profit] at every tier floor and ceiling.

    A multiple m corresponds to a profit of (m - 1) x investment_amount.
    """
    if gross_profit <= 0:
        return []
    cuts = {Decimal("0"), gross_profit}
    for tier in offer.hurdle_tiers:
        for moic in (tier.moic_floor, tier.moic_ceiling):
            profit = (moic - 1) * investment_amount
            if 0 < profit < gross_profit:
                cuts.add(profit)
    points = sorted(cuts)
    return list(zip(points, points[1:]))


def offer_carry(
    offer: Offer,
    investment_amount: Decimal,
    gross_exit_value: Decimal,
    time_horizon: int,
) -> Decimal:
    """Carry owed on an offer's gross exit value.

    With hurdle tiers the carry is marginal: each profit band pays the
    waterfall increment at the rate of the tier it falls in, so carry never
    grows faster than profit and net return rises with exit price.
    """
    gross_profit = gross_exit_value - investment_amount

    def waterfall(profit: Decimal, carry_percent: Decimal) -> Decimal:
        return compute_carry(
            investment_amount=investment_amount,
            gross_profit=profit,
            hurdle_rate_percent=offer.hurdle_rate_percent,
            catch_up_percent=offer.catch_up_percent,
            carry_percent=carry_percent,
            time_horizon=time_horizon,
        )

    if not offer.hurdle_tiers or investment_amount <= 0:
        return waterfall(gross_profit, offer.carry_percent)

    carry = Decimal("0")
    for low, high in tier_profit_bands(offer, investment_amount, gross_profit):
        rate = effective_carry_percent(offer, 1 + low / investment_amount)
        carry += waterfall(high, rate) - waterfall(low, rate)
    return carry
