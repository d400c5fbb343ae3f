"""Wholesale recompute: every input change re-derives results and sensitivity.

Pure computation. No I/O, no caching between calls.
"""

import logging
from dataclasses import dataclass, field

from feecalc.config import settings
from feecalc.models.offer import Offer
from feecalc.models.results import CalculationResult, SensitivityPoint
from feecalc.models.scenario import Scenario
from feecalc.engine.evaluator import evaluate_offers
from feecalc.engine.sensitivity import compute_sensitivity
from feecalc.engine.validation import (
    ValidationError,
    validate_offers,
    validate_scenario,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationSnapshot:
    """Consistent (results, sensitivity) pair for one (scenario, offers) input."""
    results: list[CalculationResult] = field(default_factory=list)
    sensitivity: list[SensitivityPoint] = field(default_factory=list)
    scenario_errors: list[ValidationError] = field(default_factory=list)
    collection_errors: list[ValidationError] = field(default_factory=list)
    offer_errors: dict[str, list[ValidationError]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not (self.scenario_errors or self.collection_errors or self.offer_errors)


def recompute(
    scenario: Scenario,
    offers: list[Offer] | tuple[Offer, ...],
    steps: int = settings.sensitivity_steps,
) -> EvaluationSnapshot:
    """Evaluate all offers and the sensitivity grid; validators run alongside."""
    scenario_errors = validate_scenario(scenario)
    collection_errors, offer_errors = validate_offers(offers)
    if scenario_errors or collection_errors or offer_errors:
        logger.debug(
            "Recomputing with invalid input: %d scenario, %d collection, %d offer errors",
            len(scenario_errors),
            len(collection_errors),
            sum(len(e) for e in offer_errors.values()),
        )

    return EvaluationSnapshot(
        results=evaluate_offers(scenario, offers),
        sensitivity=compute_sensitivity(scenario, offers, steps),
        scenario_errors=scenario_errors,
        collection_errors=collection_errors,
        offer_errors=offer_errors,
    )
