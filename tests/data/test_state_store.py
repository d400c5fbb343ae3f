"""Tests for the versioned calculator state store."""

import json
from dataclasses import replace
from decimal import Decimal

import pytest
from pydantic import ValidationError

from feecalc.data.state_store import (
    CURRENT_VERSION,
    CalculatorState,
    StateVersionError,
    dump_state,
    load_state,
    migrate_state,
    read_state_file,
    write_state_file,
)
from feecalc.engine.defaults import OFFER_PALETTE
from feecalc.models.offer import HurdleTier, ManagementFeeBasis
from feecalc.models.scenario import PriceMode


@pytest.fixture
def v1_document():
    """Browser store payload from before valuation mode and offer colors."""
    return {
        "state": {
            "scenario": {
                "investmentAmount": 50000,
                "exitPricePerShare": 250,
                "timeHorizon": 5,
            },
            "offers": [
                {
                    "id": "a",
                    "name": "SPV",
                    "pricePerShare": 80,
                    "managementFeePercent": 2,
                    "carryPercent": 20,
                    "showAdvanced": True,
                },
                {"pricePerShare": 100, "collapsed": False},
            ],
        },
        "version": 0,
    }


# ── Migration ────────────────────────────────────────────────────

class TestMigrateState:
    def test_envelope_upgraded(self, v1_document):
        migrated = migrate_state(v1_document)
        assert migrated["version"] == CURRENT_VERSION
        assert "state" not in migrated

    def test_scenario_defaults(self, v1_document):
        scenario = migrate_state(v1_document)["scenario"]
        assert scenario["priceMode"] == "pps"
        assert scenario["sharesOutstanding"] == 1_000_000
        assert scenario["exitValuation"] == Decimal("250000000")

    def test_offer_defaults(self, v1_document):
        first, second = migrate_state(v1_document)["offers"]
        assert first["hurdleRatePercent"] == 0
        assert first["managementFeeBasis"] == "committed"
        assert first["color"] == OFFER_PALETTE[0]
        assert "showAdvanced" not in first
        assert second["id"] == "offer-2"
        assert second["name"] == "Offer B"
        assert second["color"] == OFFER_PALETTE[1]
        assert "collapsed" not in second

    def test_input_untouched(self, v1_document):
        migrate_state(v1_document)
        assert "showAdvanced" in v1_document["state"]["offers"][0]

    def test_current_version_passthrough(self):
        raw = {"version": CURRENT_VERSION, "scenario": {"investmentAmount": 1}, "offers": []}
        assert migrate_state(raw) == raw

    def test_newer_version_rejected(self):
        with pytest.raises(StateVersionError):
            migrate_state({"version": CURRENT_VERSION + 1, "scenario": {}, "offers": []})


# ── Load / dump ──────────────────────────────────────────────────

class TestLoadState:
    def test_load_v1(self, v1_document):
        state = load_state(v1_document)
        assert state.scenario.investment_amount == Decimal("50000")
        assert state.scenario.price_mode is PriceMode.PER_SHARE
        assert state.scenario.exit_price == Decimal("250")
        spv = state.offers[0]
        assert spv.name == "SPV"
        assert spv.management_fee_basis is ManagementFeeBasis.COMMITTED
        assert spv.carry_percent == Decimal("20")

    def test_missing_color_assigned(self):
        raw = {
            "version": 2,
            "scenario": {"investmentAmount": 1000, "exitPricePerShare": 10, "timeHorizon": 1},
            "offers": [
                {"id": "x", "name": "X", "color": "#111111", "pricePerShare": 5},
                {"id": "y", "name": "Y", "pricePerShare": 5},
            ],
        }
        state = load_state(raw)
        assert state.offers[0].color == "#111111"
        assert state.offers[1].color == OFFER_PALETTE[1]

    def test_empty_offers_fall_back_to_presets(self):
        raw = {
            "version": 2,
            "scenario": {"investmentAmount": 1000, "exitPricePerShare": 10, "timeHorizon": 1},
            "offers": [],
        }
        assert [o.name for o in load_state(raw).offers] == ["Fund A", "Direct / No Fees"]

    def test_malformed_field(self):
        raw = {
            "version": 2,
            "scenario": {"investmentAmount": "lots", "exitPricePerShare": 10, "timeHorizon": 1},
            "offers": [],
        }
        with pytest.raises(ValidationError):
            load_state(raw)

    def test_dump_is_camel_case(self, base_scenario, fund_offer):
        doc = dump_state(CalculatorState(scenario=base_scenario, offers=(fund_offer,)))
        assert doc["version"] == CURRENT_VERSION
        assert "investmentAmount" in doc["scenario"]
        assert doc["offers"][0]["managementFeeBasis"] == "committed"
        assert doc["scenario"]["priceMode"] == "pps"

    def test_dump_then_load(self, valuation_scenario, fund_offer):
        offer = replace(
            fund_offer,
            hurdle_tiers=(HurdleTier(Decimal("2"), Decimal("4"), Decimal("25"), id="t1"),),
        )
        state = CalculatorState(scenario=valuation_scenario, offers=(offer,))
        assert load_state(dump_state(state)) == state


# ── Files ────────────────────────────────────────────────────────

class TestStateFile:
    def test_missing_file_gives_defaults(self, tmp_path):
        state = read_state_file(tmp_path / "nope.json")
        assert state.scenario.investment_amount == Decimal("100000")
        assert len(state.offers) == 2

    def test_write_then_read(self, tmp_path, base_scenario, fee_free_offer):
        path = tmp_path / "nested" / "state.json"
        state = CalculatorState(scenario=base_scenario, offers=(fee_free_offer,))
        write_state_file(path, state)
        assert json.loads(path.read_text())["version"] == CURRENT_VERSION
        assert read_state_file(path) == state
