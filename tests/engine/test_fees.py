from dataclasses import replace
from decimal import Decimal

from feecalc.engine.fees import (
    annual_admin_fee,
    annual_fees,
    annual_management_fee,
    estimated_nav,
    placement_fee,
    setup_fee,
    upfront_fees,
)
from feecalc.models.offer import ManagementFeeBasis


class TestEstimatedNAV:
    def test_endpoints(self, base_scenario):
        exit_value = Decimal("300000")
        assert estimated_nav(base_scenario, exit_value, 0) == Decimal("100000")
        assert estimated_nav(base_scenario, exit_value, 3) == Decimal("300000")

    def test_straight_line(self, base_scenario):
        nav = estimated_nav(base_scenario, Decimal("400000"), 1)
        assert nav == Decimal("200000")


class TestManagementFee:
    def test_committed_basis(self, fund_offer):
        fee = annual_management_fee(fund_offer, Decimal("100000"), Decimal("250000"))
        assert fee == Decimal("2000")

    def test_invested_basis_matches_committed(self, fund_offer):
        offer = replace(fund_offer, management_fee_basis=ManagementFeeBasis.INVESTED)
        fee = annual_management_fee(offer, Decimal("100000"), Decimal("250000"))
        assert fee == Decimal("2000")

    def test_nav_basis(self, fund_offer):
        offer = replace(fund_offer, management_fee_basis=ManagementFeeBasis.NAV)
        fee = annual_management_fee(offer, Decimal("100000"), Decimal("250000"))
        assert fee == Decimal("5000")

    def test_no_fee(self, fee_free_offer):
        assert annual_management_fee(fee_free_offer, Decimal("100000"), Decimal("1")) == 0


class TestAdminFee:
    def test_flat(self, fee_free_offer):
        offer = replace(fee_free_offer, admin_fee=Decimal("750"))
        assert annual_admin_fee(offer, Decimal("100000")) == Decimal("750")

    def test_percent(self, fee_free_offer):
        offer = replace(fee_free_offer, admin_fee=Decimal("0.5"), admin_fee_is_percent=True)
        assert annual_admin_fee(offer, Decimal("100000")) == Decimal("500")


class TestUpfrontFees:
    def test_flat_setup_plus_placement(self, fee_free_offer):
        offer = replace(
            fee_free_offer,
            setup_fee=Decimal("2500"),
            placement_fee_percent=Decimal("2"),
        )
        assert setup_fee(offer, Decimal("100000")) == Decimal("2500")
        assert placement_fee(offer, Decimal("100000")) == Decimal("2000")
        assert upfront_fees(offer, Decimal("100000")) == Decimal("4500")

    def test_percent_setup(self, fee_free_offer):
        offer = replace(fee_free_offer, setup_fee=Decimal("1"), setup_fee_is_percent=True)
        assert setup_fee(offer, Decimal("100000")) == Decimal("1000")

    def test_none(self, fee_free_offer):
        assert upfront_fees(fee_free_offer, Decimal("100000")) == 0


class TestAnnualFees:
    def test_nav_basis_grows_with_nav(self, base_scenario, fund_offer):
        offer = replace(fund_offer, management_fee_basis=ManagementFeeBasis.NAV)
        exit_value = Decimal("300000")
        year_1, _ = annual_fees(offer, base_scenario, exit_value, 1)
        year_3, _ = annual_fees(offer, base_scenario, exit_value, 3)
        assert year_1 < year_3
        assert year_3 == Decimal("6000")

    def test_admin_included(self, base_scenario, fund_offer):
        offer = replace(fund_offer, admin_fee=Decimal("300"))
        management, admin = annual_fees(offer, base_scenario, Decimal("300000"), 2)
        assert management == Decimal("2000")
        assert admin == Decimal("300")
