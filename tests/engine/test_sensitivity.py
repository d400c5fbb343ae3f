from decimal import Decimal

from feecalc.engine.evaluator import evaluate_offer
from feecalc.engine.sensitivity import compute_sensitivity, sensitivity_prices


class TestSensitivityPrices:
    def test_default_grid(self):
        prices = sensitivity_prices(Decimal("300"), 25)
        assert len(prices) == 26
        assert prices[0] == Decimal("75")
        assert prices[-1] == Decimal("900")
        assert all(a < b for a, b in zip(prices, prices[1:]))

    def test_custom_multiples(self):
        prices = sensitivity_prices(Decimal("100"), 4, low_multiple=0.5, high_multiple=1.5)
        assert prices == [Decimal("50"), Decimal("75"), Decimal("100"), Decimal("125"), Decimal("150")]

    def test_degenerate_steps(self):
        assert sensitivity_prices(Decimal("100"), 0) == [Decimal("25")]


class TestComputeSensitivity:
    def test_point_count_and_keys(self, base_scenario, fund_offer, fee_free_offer):
        points = compute_sensitivity(base_scenario, [fund_offer, fee_free_offer], steps=5)
        assert len(points) == 6
        for point in points:
            assert set(point.results) == {"fund", "direct"}

    def test_matches_full_evaluation(self, base_scenario, fund_offer):
        points = compute_sensitivity(base_scenario, [fund_offer], steps=3)
        for point in points:
            full = evaluate_offer(base_scenario.with_exit_price(point.exit_price), fund_offer)
            reduced = point.results["fund"]
            assert reduced.net_return == full.net_return
            assert reduced.net_moic == full.net_moic
            assert reduced.net_irr == full.net_irr

    def test_net_return_rises_with_price(self, base_scenario, fee_free_offer):
        points = compute_sensitivity(base_scenario, [fee_free_offer], steps=10)
        returns = [p.results["direct"].net_return for p in points]
        assert all(a < b for a, b in zip(returns, returns[1:]))

    def test_offers_are_independent(self, base_scenario, fund_offer, fee_free_offer):
        alone = compute_sensitivity(base_scenario, [fee_free_offer], steps=4)
        together = compute_sensitivity(base_scenario, [fund_offer, fee_free_offer], steps=4)
        assert [p.results["direct"] for p in alone] == [p.results["direct"] for p in together]

    def test_valuation_mode_centers_on_derived_price(self, valuation_scenario, fee_free_offer):
        points = compute_sensitivity(valuation_scenario, [fee_free_offer], steps=25)
        assert points[0].exit_price == Decimal("75")
        assert points[-1].exit_price == Decimal("900")

    def test_no_offers(self, base_scenario):
        points = compute_sensitivity(base_scenario, [], steps=2)
        assert len(points) == 3
        assert all(p.results == {} for p in points)
