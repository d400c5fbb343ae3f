"""Canonical test fixtures used across all engine tests.

Fixture: $100K investment, exit at $300/share after 3 years.
Offers: a fee-free direct purchase and a 2/20 fund (8% hurdle, full
catch-up), both buying at $100/share.
"""

import pytest
from decimal import Decimal

from feecalc.models.offer import ManagementFeeBasis, Offer
from feecalc.models.scenario import PriceMode, Scenario


@pytest.fixture
def base_scenario() -> Scenario:
    """$100K in, $300 exit price, 3 year hold."""
    return Scenario(
        investment_amount=Decimal("100000"),
        exit_price_per_share=Decimal("300"),
        time_horizon=3,
    )


@pytest.fixture
def valuation_scenario() -> Scenario:
    """Same exit as base_scenario, entered as a $300M valuation over 1M shares."""
    return Scenario(
        investment_amount=Decimal("100000"),
        exit_price_per_share=Decimal("0"),
        time_horizon=3,
        price_mode=PriceMode.VALUATION,
        exit_valuation=Decimal("300000000"),
        shares_outstanding=Decimal("1000000"),
    )


@pytest.fixture
def fee_free_offer() -> Offer:
    return Offer(id="direct", name="Direct", price_per_share=Decimal("100"))


@pytest.fixture
def fund_offer() -> Offer:
    """2% management on committed capital, 20% carry over an 8% hurdle, 100% catch-up."""
    return Offer(
        id="fund",
        name="Fund",
        color="#14b8a6",
        price_per_share=Decimal("100"),
        management_fee_percent=Decimal("2"),
        management_fee_basis=ManagementFeeBasis.COMMITTED,
        carry_percent=Decimal("20"),
        hurdle_rate_percent=Decimal("8"),
        catch_up_percent=Decimal("100"),
    )
