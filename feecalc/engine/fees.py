"""Management, admin and upfront fee computation.

Pure functions: Decimal in, Decimal out. No I/O.
Percent inputs are in percent units (Decimal("2") = 2%).
"""

from decimal import Decimal

from feecalc.models.offer import Offer, ManagementFeeBasis
from feecalc.models.scenario import Scenario

HUNDRED = Decimal("100")


def estimated_nav(scenario: Scenario, gross_exit_value: Decimal, year: int) -> Decimal:
    """Straight-line NAV estimate for a year of the holding period.

    Year 0 = investment amount, final year = gross exit value. The same
    growth path is used for every offer so NAV-based fees stay comparable.
    """
    investment = scenario.investment_amount
    return investment + (gross_exit_value - investment) * year / scenario.time_horizon


def annual_management_fee(
    offer: Offer, investment_amount: Decimal, current_nav: Decimal
) -> Decimal:
    """One year's management fee on the offer's fee basis."""
    rate = offer.management_fee_percent / HUNDRED
    if offer.management_fee_basis is ManagementFeeBasis.NAV:
        return current_nav * rate
    # Committed and invested capital are the same amount for a single purchase
    return investment_amount * rate


def annual_admin_fee(offer: Offer, investment_amount: Decimal) -> Decimal:
    if offer.admin_fee_is_percent:
        return investment_amount * offer.admin_fee / HUNDRED
    return offer.admin_fee


def setup_fee(offer: Offer, investment_amount: Decimal) -> Decimal:
    if offer.setup_fee_is_percent:
        return investment_amount * offer.setup_fee / HUNDRED
    return offer.setup_fee


def placement_fee(offer: Offer, investment_amount: Decimal) -> Decimal:
    return investment_amount * offer.placement_fee_percent / HUNDRED


def upfront_fees(offer: Offer, investment_amount: Decimal) -> Decimal:
    """One-time fees paid on top of the investment amount."""
    return setup_fee(offer, investment_amount) + placement_fee(offer, investment_amount)


def annual_fees(
    offer: Offer, scenario: Scenario, gross_exit_value: Decimal, year: int
) -> tuple[Decimal, Decimal]:
    """(management fee, admin fee) charged in a given year (1-indexed)."""
    nav = estimated_nav(scenario, gross_exit_value, year)
    return (
        annual_management_fee(offer, scenario.investment_amount, nav),
        annual_admin_fee(offer, scenario.investment_amount),
    )
