"""Exit-price sensitivity sweep across all offers."""

from decimal import Decimal

from feecalc.config import settings
from feecalc.models.offer import Offer
from feecalc.models.results import SensitivityPoint, SensitivityResult
from feecalc.models.scenario import Scenario
from feecalc.engine.evaluator import evaluate_offer


def sensitivity_prices(
    base_exit_price: Decimal,
    steps: int = settings.sensitivity_steps,
    low_multiple: float = settings.sensitivity_low_multiple,
    high_multiple: float = settings.sensitivity_high_multiple,
) -> list[Decimal]:
    """steps + 1 evenly spaced exit prices from low_multiple to high_multiple of base."""
    low = base_exit_price * Decimal(str(low_multiple))
    high = base_exit_price * Decimal(str(high_multiple))
    if steps < 1:
        return [low]
    step_size = (high - low) / steps
    return [low + step_size * i for i in range(steps + 1)]


def compute_sensitivity(
    scenario: Scenario,
    offers: list[Offer] | tuple[Offer, ...],
    steps: int = settings.sensitivity_steps,
) -> list[SensitivityPoint]:
    """Net outcome curves for every offer over a grid of exit prices.

    Each point re-runs the full evaluation on a per-share clone of the
    scenario and keeps only net return, net MOIC and net IRR. Offers are
    evaluated independently; one offer's curve never depends on another's terms.
    """
    points: list[SensitivityPoint] = []
    for exit_price in sensitivity_prices(scenario.exit_price, steps):
        test_scenario = scenario.with_exit_price(exit_price)
        results: dict[str, SensitivityResult] = {}
        for offer in offers:
            calc = evaluate_offer(test_scenario, offer)
            results[offer.id] = SensitivityResult(
                net_return=calc.net_return,
                net_moic=calc.net_moic,
                net_irr=calc.net_irr,
            )
        points.append(SensitivityPoint(exit_price=exit_price, results=results))
    return points
