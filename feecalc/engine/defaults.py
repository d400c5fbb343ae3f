"""Default scenario, preset offers and offer-collection edits.

Every function returns new objects; nothing here keeps state between calls.
"""

import uuid
from dataclasses import replace
from decimal import Decimal

from feecalc.config import settings
from feecalc.models.offer import ManagementFeeBasis, Offer
from feecalc.models.scenario import PriceMode, Scenario

OFFER_PALETTE = ("#6366f1", "#14b8a6", "#f59e0b", "#f43f5e", "#8b5cf6")


def next_color(offer_count: int) -> str:
    """Palette color for the offer added after offer_count existing offers."""
    return OFFER_PALETTE[offer_count % len(OFFER_PALETTE)]


def default_scenario() -> Scenario:
    return Scenario(
        investment_amount=Decimal("100000"),
        exit_price_per_share=Decimal("300"),
        time_horizon=3,
        price_mode=PriceMode.PER_SHARE,
        exit_valuation=Decimal("300000000"),
        shares_outstanding=Decimal("1000000"),
    )


def default_offer(name: str, offer_count: int = 0, offer_id: str | None = None) -> Offer:
    """Fee-free offer at $100/share, colored for its position in the list."""
    return Offer(
        id=offer_id or str(uuid.uuid4()),
        name=name,
        color=next_color(offer_count),
        price_per_share=Decimal("100"),
        management_fee_basis=ManagementFeeBasis.COMMITTED,
    )


def preset_offer_a(offer_count: int = 0, offer_id: str | None = None) -> Offer:
    """Typical fund terms: 2 and 20 with an 8% hurdle and full catch-up."""
    return replace(
        default_offer("Fund A", offer_count, offer_id),
        price_per_share=Decimal("100"),
        management_fee_percent=Decimal("2"),
        carry_percent=Decimal("20"),
        hurdle_rate_percent=Decimal("8"),
        catch_up_percent=Decimal("100"),
    )


def preset_offer_b(offer_count: int = 1, offer_id: str | None = None) -> Offer:
    """Direct purchase at a higher price with no fees."""
    return replace(
        default_offer("Direct / No Fees", offer_count, offer_id),
        price_per_share=Decimal("120"),
    )


def initial_offers() -> tuple[Offer, ...]:
    return (preset_offer_a(0), preset_offer_b(1))


def _offer_label(index: int) -> str:
    return f"Offer {chr(ord('A') + index)}"


def add_offer(offers: tuple[Offer, ...]) -> tuple[Offer, ...]:
    """Append a default offer; unchanged when the collection is full."""
    if len(offers) >= settings.max_offers:
        return offers
    return offers + (default_offer(_offer_label(len(offers)), len(offers)),)


def duplicate_offer(offers: tuple[Offer, ...], offer_id: str) -> tuple[Offer, ...]:
    if len(offers) >= settings.max_offers:
        return offers
    source = next((o for o in offers if o.id == offer_id), None)
    if source is None:
        return offers
    copy = replace(
        source,
        id=str(uuid.uuid4()),
        name=f"{source.name} (copy)",
        color=next_color(len(offers)),
    )
    return offers + (copy,)


def remove_offer(offers: tuple[Offer, ...], offer_id: str) -> tuple[Offer, ...]:
    """Drop an offer; the last remaining offer is never removed."""
    remaining = tuple(o for o in offers if o.id != offer_id)
    if not remaining:
        return offers
    return remaining


def update_offer(offers: tuple[Offer, ...], offer_id: str, **changes) -> tuple[Offer, ...]:
    return tuple(replace(o, **changes) if o.id == offer_id else o for o in offers)
