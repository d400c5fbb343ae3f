"""Evaluation routes: recompute results, sensitivity and comparison for a full input set."""

import logging

from fastapi import APIRouter, HTTPException

from feecalc.api.schemas import (
    CalculationResultResponse,
    ComparisonRowResponse,
    DefaultsResponse,
    EvaluateRequest,
    EvaluateResponse,
    SensitivityPointResponse,
    ValidateRequest,
    ValidationErrorResponse,
    ValidationResponse,
)
from feecalc.config import settings
from feecalc.data.state_store import OfferState, ScenarioState
from feecalc.engine.comparator import compare_results
from feecalc.engine.defaults import default_scenario, initial_offers
from feecalc.engine.recompute import recompute
from feecalc.engine.validation import ValidationError, validate_offers, validate_scenario

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["evaluation"])


def _errors(errors: list[ValidationError]) -> list[ValidationErrorResponse]:
    return [ValidationErrorResponse.model_validate(e) for e in errors]


def _offer_errors(
    offer_errors: dict[str, list[ValidationError]],
) -> dict[str, list[ValidationErrorResponse]]:
    return {offer_id: _errors(errors) for offer_id, errors in offer_errors.items()}


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(req: EvaluateRequest):
    """Primary endpoint: scenario + offers -> results, sensitivity curves, comparison."""
    if len(req.offers) > settings.max_offers:
        raise HTTPException(
            status_code=400, detail=f"At most {settings.max_offers} offers can be compared"
        )

    scenario = req.scenario.to_model()
    offers = tuple(o.to_model() for o in req.offers)
    snapshot = recompute(scenario, offers, req.steps)
    table = compare_results(snapshot.results)
    logger.debug("Evaluated %d offers over %d sensitivity points", len(offers), len(snapshot.sensitivity))

    return EvaluateResponse(
        valid=snapshot.is_valid,
        scenario_errors=_errors(snapshot.scenario_errors),
        collection_errors=_errors(snapshot.collection_errors),
        offer_errors=_offer_errors(snapshot.offer_errors),
        results=[CalculationResultResponse.model_validate(r) for r in snapshot.results],
        sensitivity=[SensitivityPointResponse.model_validate(p) for p in snapshot.sensitivity],
        comparison=[ComparisonRowResponse.model_validate(row) for row in table.rows],
    )


@router.post("/validate", response_model=ValidationResponse)
def validate(req: ValidateRequest):
    """Field-level validation only; no evaluation."""
    scenario_errors = validate_scenario(req.scenario.to_model())
    collection_errors, offer_errors = validate_offers(tuple(o.to_model() for o in req.offers))
    return ValidationResponse(
        valid=not (scenario_errors or collection_errors or offer_errors),
        scenario_errors=_errors(scenario_errors),
        collection_errors=_errors(collection_errors),
        offer_errors=_offer_errors(offer_errors),
    )


@router.get("/defaults", response_model=DefaultsResponse)
def defaults():
    """Starting scenario and the two preset offers."""
    return DefaultsResponse(
        scenario=ScenarioState.from_model(default_scenario()),
        offers=[OfferState.from_model(o) for o in initial_offers()],
    )
