"""Input validators. An empty list means valid.

The evaluator never refuses input; these checks run alongside it so the
caller can flag fields for correction.
"""

from dataclasses import dataclass
from decimal import Decimal

from feecalc.config import settings
from feecalc.models.offer import Offer
from feecalc.models.scenario import PriceMode, Scenario

MAX_TIME_HORIZON = 30


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


def _percent_in_range(value: Decimal) -> bool:
    return Decimal("0") <= value <= Decimal("100")


def validate_scenario(scenario: Scenario) -> list[ValidationError]:
    errors: list[ValidationError] = []
    if scenario.investment_amount <= 0:
        errors.append(ValidationError("investment_amount", "Must be positive"))
    if scenario.price_mode is PriceMode.VALUATION:
        if scenario.exit_valuation <= 0:
            errors.append(ValidationError("exit_valuation", "Must be positive"))
        if scenario.shares_outstanding <= 0:
            errors.append(ValidationError("shares_outstanding", "Must be positive"))
    elif scenario.exit_price_per_share <= 0:
        errors.append(ValidationError("exit_price_per_share", "Must be positive"))
    if scenario.time_horizon <= 0:
        errors.append(ValidationError("time_horizon", "Must be positive"))
    if scenario.time_horizon > MAX_TIME_HORIZON:
        errors.append(ValidationError("time_horizon", f"Max {MAX_TIME_HORIZON} years"))
    return errors


def validate_offer(offer: Offer) -> list[ValidationError]:
    errors: list[ValidationError] = []
    if offer.price_per_share <= 0:
        errors.append(ValidationError("price_per_share", "Must be positive"))
    if offer.management_fee_percent < 0:
        errors.append(ValidationError("management_fee_percent", "Cannot be negative"))
    if not _percent_in_range(offer.carry_percent):
        errors.append(ValidationError("carry_percent", "0-100%"))
    if offer.hurdle_rate_percent < 0:
        errors.append(ValidationError("hurdle_rate_percent", "Cannot be negative"))
    if not _percent_in_range(offer.catch_up_percent):
        errors.append(ValidationError("catch_up_percent", "0-100%"))
    if offer.setup_fee < 0:
        errors.append(ValidationError("setup_fee", "Cannot be negative"))
    if offer.placement_fee_percent < 0:
        errors.append(ValidationError("placement_fee_percent", "Cannot be negative"))
    if offer.admin_fee < 0:
        errors.append(ValidationError("admin_fee", "Cannot be negative"))

    for i, tier in enumerate(offer.hurdle_tiers):
        prefix = f"hurdle_tiers[{i}]"
        if tier.moic_floor < 0:
            errors.append(ValidationError(f"{prefix}.moic_floor", "Cannot be negative"))
        if tier.moic_ceiling <= tier.moic_floor:
            errors.append(ValidationError(f"{prefix}.moic_ceiling", "Must exceed floor"))
        if not _percent_in_range(tier.carry_rate):
            errors.append(ValidationError(f"{prefix}.carry_rate", "0-100%"))
    return errors


def validate_offers(
    offers: list[Offer] | tuple[Offer, ...],
) -> tuple[list[ValidationError], dict[str, list[ValidationError]]]:
    """Collection-level errors plus per-offer errors keyed by offer id."""
    collection_errors: list[ValidationError] = []
    if not offers:
        collection_errors.append(ValidationError("offers", "At least one offer is required"))
    if len(offers) > settings.max_offers:
        collection_errors.append(
            ValidationError("offers", f"At most {settings.max_offers} offers")
        )

    per_offer = {}
    for offer in offers:
        errors = validate_offer(offer)
        if errors:
            per_offer[offer.id] = errors
    return collection_errors, per_offer


def is_scenario_valid(scenario: Scenario) -> bool:
    return not validate_scenario(scenario)


def is_offer_valid(offer: Offer) -> bool:
    return not validate_offer(offer)
