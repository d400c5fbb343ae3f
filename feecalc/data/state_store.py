"""Persisted calculator state: versioned JSON document of scenario + offers.

Load path: raw JSON -> migrate_state (pure, fills defaults for any field an
older version lacks) -> pydantic validation -> engine dataclasses. Runs once
at startup; nothing is patched after deserialization.

Document (version 2, camelCase keys):
    {"version": 2, "scenario": {...}, "offers": [{...}, ...]}

Version 1 is the browser store's shape, optionally wrapped in a
{"state": {...}, "version": 0} envelope.
"""

import json
import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from feecalc.engine.defaults import default_scenario, initial_offers, next_color
from feecalc.models.offer import HurdleTier, ManagementFeeBasis, Offer
from feecalc.models.scenario import PriceMode, Scenario

logger = logging.getLogger(__name__)

CURRENT_VERSION = 2

# UI-only fields of the version 1 store
_DROPPED_OFFER_FIELDS = ("showAdvanced", "collapsed")

_SCENARIO_DEFAULTS: dict[str, Any] = {
    "priceMode": PriceMode.PER_SHARE.value,
    "sharesOutstanding": 1_000_000,
}

_OFFER_DEFAULTS: dict[str, Any] = {
    "pricePerShare": 100,
    "managementFeePercent": 0,
    "managementFeeBasis": ManagementFeeBasis.COMMITTED.value,
    "adminFee": 0,
    "adminFeeIsPercent": False,
    "setupFee": 0,
    "setupFeeIsPercent": False,
    "placementFeePercent": 0,
    "carryPercent": 0,
    "hurdleRatePercent": 0,
    "catchUpPercent": 0,
    "hurdleTiers": [],
}


class StateVersionError(ValueError):
    """Persisted state written by a newer, unknown schema version."""


# ---- Schemas ----

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HurdleTierState(_CamelModel):
    id: str = ""
    moic_floor: Decimal
    moic_ceiling: Decimal
    carry_rate: Decimal

    def to_model(self) -> HurdleTier:
        return HurdleTier(
            id=self.id,
            moic_floor=self.moic_floor,
            moic_ceiling=self.moic_ceiling,
            carry_rate=self.carry_rate,
        )


class ScenarioState(_CamelModel):
    investment_amount: Decimal
    exit_price_per_share: Decimal
    time_horizon: int
    price_mode: PriceMode = PriceMode.PER_SHARE
    exit_valuation: Decimal = Decimal("0")
    shares_outstanding: Decimal = Decimal("1000000")

    def to_model(self) -> Scenario:
        return Scenario(
            investment_amount=self.investment_amount,
            exit_price_per_share=self.exit_price_per_share,
            time_horizon=self.time_horizon,
            price_mode=self.price_mode,
            exit_valuation=self.exit_valuation,
            shares_outstanding=self.shares_outstanding,
        )

    @classmethod
    def from_model(cls, scenario: Scenario) -> "ScenarioState":
        return cls(
            investment_amount=scenario.investment_amount,
            exit_price_per_share=scenario.exit_price_per_share,
            time_horizon=scenario.time_horizon,
            price_mode=scenario.price_mode,
            exit_valuation=scenario.exit_valuation,
            shares_outstanding=scenario.shares_outstanding,
        )


class OfferState(_CamelModel):
    id: str
    name: str
    color: str = ""
    price_per_share: Decimal
    management_fee_percent: Decimal = Decimal("0")
    management_fee_basis: ManagementFeeBasis = ManagementFeeBasis.COMMITTED
    admin_fee: Decimal = Decimal("0")
    admin_fee_is_percent: bool = False
    setup_fee: Decimal = Decimal("0")
    setup_fee_is_percent: bool = False
    placement_fee_percent: Decimal = Decimal("0")
    carry_percent: Decimal = Decimal("0")
    hurdle_rate_percent: Decimal = Decimal("0")
    catch_up_percent: Decimal = Decimal("0")
    hurdle_tiers: list[HurdleTierState] = Field(default_factory=list)

    def to_model(self) -> Offer:
        return Offer(
            id=self.id,
            name=self.name,
            color=self.color,
            price_per_share=self.price_per_share,
            management_fee_percent=self.management_fee_percent,
            management_fee_basis=self.management_fee_basis,
            admin_fee=self.admin_fee,
            admin_fee_is_percent=self.admin_fee_is_percent,
            setup_fee=self.setup_fee,
            setup_fee_is_percent=self.setup_fee_is_percent,
            placement_fee_percent=self.placement_fee_percent,
            carry_percent=self.carry_percent,
            hurdle_rate_percent=self.hurdle_rate_percent,
            catch_up_percent=self.catch_up_percent,
            hurdle_tiers=tuple(t.to_model() for t in self.hurdle_tiers),
        )

    @classmethod
    def from_model(cls, offer: Offer) -> "OfferState":
        return cls(
            id=offer.id,
            name=offer.name,
            color=offer.color,
            price_per_share=offer.price_per_share,
            management_fee_percent=offer.management_fee_percent,
            management_fee_basis=offer.management_fee_basis,
            admin_fee=offer.admin_fee,
            admin_fee_is_percent=offer.admin_fee_is_percent,
            setup_fee=offer.setup_fee,
            setup_fee_is_percent=offer.setup_fee_is_percent,
            placement_fee_percent=offer.placement_fee_percent,
            carry_percent=offer.carry_percent,
            hurdle_rate_percent=offer.hurdle_rate_percent,
            catch_up_percent=offer.catch_up_percent,
            hurdle_tiers=[
                HurdleTierState(
                    id=t.id,
                    moic_floor=t.moic_floor,
                    moic_ceiling=t.moic_ceiling,
                    carry_rate=t.carry_rate,
                )
                for t in offer.hurdle_tiers
            ],
        )


class StateDocument(_CamelModel):
    version: int = CURRENT_VERSION
    scenario: ScenarioState
    offers: list[OfferState] = Field(default_factory=list)


@dataclass(frozen=True)
class CalculatorState:
    scenario: Scenario
    offers: tuple[Offer, ...]


def default_state() -> CalculatorState:
    return CalculatorState(scenario=default_scenario(), offers=initial_offers())


# ---- Migration ----

def _migrate_scenario_v1(scenario: dict[str, Any]) -> dict[str, Any]:
    migrated = {**_SCENARIO_DEFAULTS, **scenario}
    if "exitValuation" not in migrated:
        migrated["exitValuation"] = (
            Decimal(str(migrated.get("exitPricePerShare", 0)))
            * Decimal(str(migrated["sharesOutstanding"]))
        )
    return migrated


def _migrate_offer_v1(offer: dict[str, Any], index: int) -> dict[str, Any]:
    migrated = {**_OFFER_DEFAULTS, **offer}
    for key in _DROPPED_OFFER_FIELDS:
        migrated.pop(key, None)
    migrated.setdefault("id", f"offer-{index + 1}")
    migrated.setdefault("name", f"Offer {chr(ord('A') + index)}")
    migrated.setdefault("color", next_color(index))
    return migrated


def migrate_state(raw: dict[str, Any]) -> dict[str, Any]:
    """Upgrade a persisted document of any known version to CURRENT_VERSION.

    Pure: returns a new dict and leaves raw untouched.
    """
    if "state" in raw and "scenario" not in raw:
        # Browser store envelope: {"state": {...}, "version": 0}
        payload = dict(raw["state"])
        version = 1
    else:
        payload = dict(raw)
        version = payload.get("version", 1)

    if version > CURRENT_VERSION:
        raise StateVersionError(
            f"State version {version} is newer than supported version {CURRENT_VERSION}"
        )

    if version < CURRENT_VERSION:
        logger.info("Migrating persisted state from version %s to %s", version, CURRENT_VERSION)
        payload = {
            "scenario": _migrate_scenario_v1(payload.get("scenario", {})),
            "offers": [_migrate_offer_v1(o, i) for i, o in enumerate(payload.get("offers", []))],
        }

    payload["version"] = CURRENT_VERSION
    return payload


# ---- Load / save ----

def load_state(raw: dict[str, Any]) -> CalculatorState:
    """Migrate, validate and convert a persisted document.

    Raises StateVersionError for unknown versions and pydantic's
    ValidationError for malformed fields.
    """
    document = StateDocument.model_validate(migrate_state(raw))
    offers = tuple(
        replace(o.to_model(), color=o.color or next_color(i))
        for i, o in enumerate(document.offers)
    )
    if not offers:
        logger.warning("Persisted state has no offers, using the preset offers")
        offers = initial_offers()
    return CalculatorState(scenario=document.scenario.to_model(), offers=offers)


def dump_state(state: CalculatorState) -> dict[str, Any]:
    document = StateDocument(
        version=CURRENT_VERSION,
        scenario=ScenarioState.from_model(state.scenario),
        offers=[OfferState.from_model(o) for o in state.offers],
    )
    return document.model_dump(mode="json", by_alias=True)


def read_state_file(path: str | Path) -> CalculatorState:
    """Load state from disk; a missing file yields the default state."""
    path = Path(path)
    if not path.exists():
        logger.info("No saved state at %s, starting from defaults", path)
        return default_state()
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)
    return load_state(raw)


def write_state_file(path: str | Path, state: CalculatorState) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(dump_state(state), f, indent=2)
    logger.debug("Saved state to %s", path)
